"""Groups tab implementation."""

from __future__ import annotations

from typing import Any, Optional

from textual import on
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Button, DataTable, Static, Switch

from ..modals import AddGroupScreen, delete_group_screen
from ..validators import parse_chat_id


class GroupsTab(Container):
    """Groups tab for editing per-group antilink policies."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._loading_form = False
        self._current_chat_id: Optional[str] = None
        self._table_ready = False

    def compose(self):
        with Vertical(id="groups-panel"):
            with Horizontal(id="groups-body"):
                with Container(id="groups-left"):
                    yield DataTable(id="groups-table", cursor_type="row")
                with Container(id="groups-right"):
                    yield Static("Group details", id="groups-title")
                    yield Static("chat_id", classes="form-label")
                    yield Static("", id="group-chat-id")
                    yield Static("type", classes="form-label")
                    yield Static("", id="group-type")
                    yield Static("antilink enabled", classes="form-label")
                    yield Switch(value=False, id="group-enabled")
                    yield Static(
                        "The bot reads this file at startup; restart it to apply edits.",
                        classes="subtle",
                    )
            with Horizontal(id="groups-actions"):
                yield Button("Add", id="add-group", variant="success")
                yield Button("Delete", id="delete-group", variant="error")

    def on_mount(self) -> None:
        table = self.query_one("#groups-table", DataTable)
        table.add_column("enabled", key="enabled", width=8)
        table.add_column("chat_id", key="chat_id", width=24)
        table.add_column("type", key="type", width=12)
        table.zebra_stripes = True
        self._table_ready = True
        self.reload_from_config()
        self._set_form_state(None)

    def reload_from_config(self) -> None:
        if not self._table_ready:
            return
        table = self.query_one("#groups-table", DataTable)
        table.clear()
        for chat_id, entry in sorted(self._get_policies().items()):
            info = parse_chat_id(chat_id)
            table.add_row(
                "yes" if entry.get("enabled", False) else "no",
                chat_id,
                info.kind,
                key=chat_id,
            )
        if self._current_chat_id not in self._get_policies():
            self._current_chat_id = None
        self._update_action_state()

    def _get_policies(self) -> dict[str, dict[str, bool]]:
        return self.app.config_state.policies

    def _update_action_state(self) -> None:
        delete_btn = self.query_one("#delete-group", Button)
        delete_btn.disabled = self._current_chat_id is None

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        self._current_chat_id = self._coerce_row_key(event.row_key)
        self._set_form_state(self._current_chat_id)
        self._update_action_state()

    @on(Switch.Changed, "#group-enabled")
    def _on_enabled_changed(self, event: Switch.Changed) -> None:
        if self._loading_form or self._current_chat_id is None:
            return
        policies = self._get_policies()
        if self._current_chat_id not in policies:
            return
        if policies[self._current_chat_id].get("enabled", False) == bool(event.value):
            return
        policies[self._current_chat_id] = {"enabled": bool(event.value)}
        self.app.mark_dirty()
        table = self.query_one("#groups-table", DataTable)
        table.update_cell(self._current_chat_id, "enabled", "yes" if event.value else "no")

    @on(Button.Pressed, "#add-group")
    def _on_add_group(self) -> None:
        existing = set(self._get_policies())
        self.app.push_screen(AddGroupScreen(existing), self._handle_add_group)

    @on(Button.Pressed, "#delete-group")
    def _on_delete_group(self) -> None:
        if self._current_chat_id is None:
            return
        self.app.push_screen(delete_group_screen(self._current_chat_id), self._handle_delete_group)

    def _handle_add_group(self, payload: dict[str, Any] | None) -> None:
        if not payload:
            return
        self._get_policies()[payload["chat_id"]] = {"enabled": bool(payload["enabled"])}
        self.app.mark_dirty()
        self.reload_from_config()

    def _handle_delete_group(self, choice: str | None) -> None:
        if choice != "delete" or self._current_chat_id is None:
            return
        self._get_policies().pop(self._current_chat_id, None)
        self.app.mark_dirty()
        self._current_chat_id = None
        self.reload_from_config()
        self._set_form_state(None)

    def _set_form_state(self, chat_id: Optional[str]) -> None:
        self._loading_form = True
        chat_display = self.query_one("#group-chat-id", Static)
        type_display = self.query_one("#group-type", Static)
        enabled_toggle = self.query_one("#group-enabled", Switch)
        entry = self._get_policies().get(chat_id) if chat_id is not None else None
        if entry is None:
            chat_display.update("")
            type_display.update("")
            enabled_toggle.value = False
            enabled_toggle.disabled = True
        else:
            chat_display.update(chat_id)
            type_display.update(parse_chat_id(chat_id).kind)
            enabled_toggle.value = bool(entry.get("enabled", False))
            enabled_toggle.disabled = False
        self._loading_form = False

    @staticmethod
    def _coerce_row_key(value: Any) -> str:
        if hasattr(value, "value"):
            return str(value.value)
        return str(value)
