from __future__ import annotations

import pytest

from core.reconnect import ReconnectPolicy


def test_delay_doubles_until_cap() -> None:
    policy = ReconnectPolicy(base_delay=1.0, max_delay=5.0)

    assert [policy.delay_for(attempt) for attempt in range(5)] == [1.0, 2.0, 4.0, 5.0, 5.0]


def test_zero_max_restarts_never_gives_up() -> None:
    policy = ReconnectPolicy(max_restarts=0)

    assert policy.allows(0)
    assert policy.allows(10_000)


def test_max_restarts_limits_attempts() -> None:
    policy = ReconnectPolicy(max_restarts=2)

    assert policy.allows(0)
    assert policy.allows(1)
    assert not policy.allows(2)


def test_negative_attempt_is_rejected() -> None:
    with pytest.raises(ValueError):
        ReconnectPolicy().delay_for(-1)
