from __future__ import annotations

from frontend.state import read_policy_file
from frontend.validators import parse_chat_id, parse_port


def test_parse_chat_id_kinds() -> None:
    supergroup = parse_chat_id(" chat_id:-1001234 ")
    group = parse_chat_id("-55")

    assert (supergroup.normalized, supergroup.kind, supergroup.error) == ("-1001234", "supergroup", None)
    assert (group.normalized, group.kind) == ("-55", "group")


def test_parse_chat_id_rejects_private_and_garbage() -> None:
    assert parse_chat_id("42").error
    assert parse_chat_id("abc").error
    assert parse_chat_id("").normalized is None


def test_parse_port() -> None:
    assert parse_port("3000") == 3000
    assert parse_port("0") is None
    assert parse_port("70000") is None
    assert parse_port("http") is None


def test_read_policy_file_tolerates_bad_files(tmp_path) -> None:
    missing = tmp_path / "missing.json"
    undecodable = tmp_path / "undecodable.json"
    undecodable.write_bytes(b'{"-1": {"enabled": true}}\xff')
    good = tmp_path / "good.json"
    good.write_text('{"-1": {"enabled": true}, "-2": 3}', encoding="utf-8")

    assert read_policy_file(missing) == ({}, None)
    policies, error = read_policy_file(undecodable)
    assert policies == {}
    assert error.startswith("undecodable.json error")
    assert read_policy_file(good) == ({"-1": {"enabled": True}}, None)
