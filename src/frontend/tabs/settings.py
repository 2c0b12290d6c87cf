"""Settings tab implementation."""

from __future__ import annotations

from typing import Any, Optional

from textual import on
from textual.containers import Container, Horizontal, ScrollableContainer, Vertical
from textual.widgets import ContentSwitcher, DataTable, Input, Select, Static, Switch, TextArea

from ..validators import parse_port


class SettingsTab(Container):
    """Settings tab for editing policy, assets, connection, http, and logging."""

    PARSE_MODES = ["markdown", "html"]
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

    SECTION_LABELS = [
        ("policy", "Policy", "Antilink settings file"),
        ("assets", "Assets", "QR image for /qr"),
        ("connection", "Connection", "Retries and reconnect backoff"),
        ("http", "HTTP", "Liveness endpoint"),
        ("logging", "Logging", "Console/file logging + redaction"),
    ]

    # widget id -> (section, key path, default)
    TEXT_FIELDS = {
        "policy-path": ("policy", ("path",), "antilink_config.json"),
        "assets-qr-image": ("assets", ("qr_image",), "paytmqr.jpg"),
        "assets-qr-caption": ("assets", ("qr_caption",), "Paytm QR Code"),
        "http-host": ("http", ("host",), "0.0.0.0"),
        "logging-file-path": ("logging", ("file", "path"), "logs/groupwarden.log"),
    }
    INT_FIELDS = {
        "connection-retries": ("connection", ("retries",), 5),
        "connection-retry-delay": ("connection", ("retry_delay",), 1),
        "connection-max-restarts": ("connection", ("max_restarts",), 0),
        "connection-restart-max-delay": ("connection", ("restart_max_delay",), 60),
        "logging-file-max-bytes": ("logging", ("file", "max_bytes"), 5 * 1024 * 1024),
        "logging-file-backup": ("logging", ("file", "backup_count"), 5),
    }
    SWITCH_FIELDS = {
        "policy-confirm": ("policy", ("confirm_after_persist",), False),
        "connection-auto-reconnect": ("connection", ("auto_reconnect",), True),
        "http-enabled": ("http", ("enabled",), True),
        "logging-enabled": ("logging", ("enabled",), False),
        "logging-console": ("logging", ("console",), True),
        "logging-file-enabled": ("logging", ("file", "enabled"), False),
        "logging-redact-enabled": ("logging", ("redact", "enabled"), False),
    }

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._loading_form = False
        self._current_section: Optional[str] = None
        self._table_ready = False

    def compose(self):
        with Vertical(id="settings-panel"):
            with Horizontal(id="settings-body"):
                with Container(id="settings-left"):
                    yield DataTable(id="settings-table", cursor_type="row")
                with Container(id="settings-right"):
                    with ContentSwitcher(id="settings-forms"):
                        with Container(id="settings-policy"):
                            yield Static("Policy", classes="settings-title")
                            yield Static("path", classes="form-label")
                            yield Input(placeholder="antilink_config.json", id="policy-path")
                            yield Static("confirm_after_persist", classes="form-label")
                            yield Switch(id="policy-confirm")
                            yield Static("parse_mode", classes="form-label")
                            yield Select(
                                [("markdown", "markdown"), ("html", "html")],
                                id="messages-parse-mode",
                                allow_blank=False,
                            )
                            yield Static("", id="policy-error", classes="settings-error")

                        with Container(id="settings-assets"):
                            yield Static("Assets", classes="settings-title")
                            yield Static("qr_image", classes="form-label")
                            yield Input(placeholder="paytmqr.jpg", id="assets-qr-image")
                            yield Static("qr_caption", classes="form-label")
                            yield Input(placeholder="Paytm QR Code", id="assets-qr-caption")
                            yield Static("", id="assets-error", classes="settings-error")

                        with Container(id="settings-connection"):
                            yield Static("Connection", classes="settings-title")
                            yield Static("retries", classes="form-label")
                            yield Input(placeholder="5", id="connection-retries")
                            yield Static("retry_delay", classes="form-label")
                            yield Input(placeholder="1", id="connection-retry-delay")
                            yield Static("auto_reconnect", classes="form-label")
                            yield Switch(id="connection-auto-reconnect")
                            yield Static("max_restarts (0 = unlimited)", classes="form-label")
                            yield Input(placeholder="0", id="connection-max-restarts")
                            yield Static("restart_max_delay", classes="form-label")
                            yield Input(placeholder="60", id="connection-restart-max-delay")
                            yield Static("", id="connection-error", classes="settings-error")

                        with Container(id="settings-http"):
                            yield Static("HTTP", classes="settings-title")
                            yield Static("enabled", classes="form-label")
                            yield Switch(id="http-enabled")
                            yield Static("host", classes="form-label")
                            yield Input(placeholder="0.0.0.0", id="http-host")
                            yield Static("port", classes="form-label")
                            yield Input(placeholder="3000", id="http-port")
                            yield Static("", id="http-error", classes="settings-error")

                        with ScrollableContainer(id="settings-logging"):
                            yield Static("Logging", classes="settings-title")
                            yield Static("enabled", classes="form-label")
                            yield Switch(id="logging-enabled")
                            yield Static("level", classes="form-label")
                            yield Select(
                                [(level, level) for level in self.LOG_LEVELS],
                                id="logging-level",
                                allow_blank=False,
                            )
                            yield Static("console", classes="form-label")
                            yield Switch(id="logging-console")
                            yield Static("file.enabled", classes="form-label")
                            yield Switch(id="logging-file-enabled")
                            yield Static("file.path", classes="form-label")
                            yield Input(placeholder="logs/groupwarden.log", id="logging-file-path")
                            yield Static("file.max_bytes", classes="form-label")
                            yield Input(placeholder="5242880", id="logging-file-max-bytes")
                            yield Static("file.backup_count", classes="form-label")
                            yield Input(placeholder="5", id="logging-file-backup")
                            yield Static("redact.enabled", classes="form-label")
                            yield Switch(id="logging-redact-enabled")
                            yield Static("redact.patterns (env names, one per line)", classes="form-label")
                            yield TextArea(id="logging-redact-patterns")
                            yield Static("", id="logging-error", classes="settings-error")

    def on_mount(self) -> None:
        table = self.query_one("#settings-table", DataTable)
        table.add_column("section", key="section", width=14)
        table.add_column("description", key="description", width=32)
        for key, label, description in self.SECTION_LABELS:
            table.add_row(label, description, key=key)
        table.zebra_stripes = True
        self._table_ready = True
        self._select_section("policy")
        self.reload_from_config()

    def reload_from_config(self) -> None:
        if not self._table_ready:
            return
        self._loading_form = True
        for widget_id, (section, path, default) in self.TEXT_FIELDS.items():
            self.query_one(f"#{widget_id}", Input).value = str(self._read(section, path, default))
        for widget_id, (section, path, default) in self.INT_FIELDS.items():
            self.query_one(f"#{widget_id}", Input).value = str(self._read(section, path, default))
        for widget_id, (section, path, default) in self.SWITCH_FIELDS.items():
            self.query_one(f"#{widget_id}", Switch).value = bool(self._read(section, path, default))
        self.query_one("#http-port", Input).value = str(self._read("http", ("port",), 3000))
        self._set_select_value(
            "#messages-parse-mode",
            self._read("messages", ("parse_mode",), "markdown"),
            self.PARSE_MODES,
            "policy-error",
        )
        self._set_select_value(
            "#logging-level",
            str(self._read("logging", ("level",), "INFO")).upper(),
            self.LOG_LEVELS,
            "logging-error",
        )
        patterns = self._read("logging", ("redact", "patterns"), []) or []
        self.query_one("#logging-redact-patterns", TextArea).text = "\n".join(patterns)
        self._apply_logging_state()
        self._loading_form = False

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        self._select_section(self._coerce_row_key(event.row_key))

    def _select_section(self, section_id: str) -> None:
        self._current_section = section_id
        switcher = self.query_one("#settings-forms", ContentSwitcher)
        switcher.current = f"settings-{section_id}"

    def _read(self, section: str, path: tuple[str, ...], default: Any) -> Any:
        node: Any = self._get_section(section)
        for key in path:
            if not isinstance(node, dict) or key not in node:
                return default
            node = node[key]
        return node

    def _write(self, section: str, path: tuple[str, ...], value: Any) -> None:
        config = self._get_section(section)
        node = config
        for key in path[:-1]:
            child = node.get(key)
            if not isinstance(child, dict):
                child = {}
                node[key] = child
            node = child
        if node.get(path[-1]) == value:
            return
        node[path[-1]] = value
        self.app.update_config_section(section, config)

    def _get_section(self, key: str) -> dict[str, Any]:
        data = self.app.config_state.data or {}
        section = data.get(key)
        if isinstance(section, dict):
            return section
        return {}

    @on(Input.Changed)
    def _on_input_changed(self, event: Input.Changed) -> None:
        if self._loading_form:
            return
        widget_id = event.input.id or ""
        if widget_id in self.TEXT_FIELDS:
            section, path, _ = self.TEXT_FIELDS[widget_id]
            self._write(section, path, event.value.strip())
        elif widget_id in self.INT_FIELDS:
            section, path, _ = self.INT_FIELDS[widget_id]
            parsed = self._parse_int(event.value, f"{section}-error")
            if parsed is not None:
                self._write(section, path, parsed)
        elif widget_id == "http-port":
            port = parse_port(event.value)
            if port is None:
                self._set_error("http-error", "Enter a port between 1 and 65535")
                return
            self._set_error("http-error", "")
            self._write("http", ("port",), port)

    @on(Switch.Changed)
    def _on_switch_changed(self, event: Switch.Changed) -> None:
        if self._loading_form:
            return
        widget_id = event.switch.id or ""
        if widget_id not in self.SWITCH_FIELDS:
            return
        section, path, _ = self.SWITCH_FIELDS[widget_id]
        self._write(section, path, bool(event.value))
        if section == "logging":
            self._apply_logging_state()

    @on(Select.Changed, "#messages-parse-mode")
    def _on_parse_mode_changed(self, event: Select.Changed) -> None:
        if self._loading_form or event.value is Select.BLANK:
            return
        self._write("messages", ("parse_mode",), event.value)

    @on(Select.Changed, "#logging-level")
    def _on_logging_level(self, event: Select.Changed) -> None:
        if self._loading_form or event.value is Select.BLANK:
            return
        self._write("logging", ("level",), event.value)

    @on(TextArea.Changed, "#logging-redact-patterns")
    def _on_logging_redact_patterns(self, event: TextArea.Changed) -> None:
        if self._loading_form:
            return
        patterns = [line.strip() for line in event.text_area.text.splitlines() if line.strip()]
        self._write("logging", ("redact", "patterns"), patterns)

    def _apply_logging_state(self) -> None:
        file_enabled = self.query_one("#logging-file-enabled", Switch).value
        redact_enabled = self.query_one("#logging-redact-enabled", Switch).value
        self.query_one("#logging-file-path", Input).disabled = not file_enabled
        self.query_one("#logging-file-max-bytes", Input).disabled = not file_enabled
        self.query_one("#logging-file-backup", Input).disabled = not file_enabled
        self.query_one("#logging-redact-patterns", TextArea).disabled = not redact_enabled

    def _set_select_value(self, selector: str, value: str, allowed: list[str], error_id: str) -> None:
        select = self.query_one(selector, Select)
        if value in allowed:
            select.value = value
            self._set_error(error_id, "")
        else:
            select.value = allowed[0]
            self._set_error(error_id, f"Invalid value: {value}")

    def _set_error(self, error_id: str, message: str) -> None:
        self.query_one(f"#{error_id}", Static).update(message)

    def _parse_int(self, value: str, error_id: str) -> Optional[int]:
        stripped = value.strip()
        if not stripped:
            self._set_error(error_id, "")
            return None
        if not stripped.isdigit():
            self._set_error(error_id, "Enter a non-negative integer")
            return None
        self._set_error(error_id, "")
        return int(stripped)

    @staticmethod
    def _coerce_row_key(value: Any) -> str:
        if hasattr(value, "value"):
            return str(value.value)
        return str(value)
