"""Main Textual app for the groupwarden config panel."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Center, Container, Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, ContentSwitcher, Footer, Static, Tab, Tabs

from .constants import ACCENT_GREEN, CONFIG_PATH, DEFAULT_POLICY_PATH, PROJECT_ROOT
from .modals import reload_confirm_screen, unsaved_changes_screen
from .state import ConfigState, read_policy_file
from .tabs.groups import GroupsTab
from .tabs.settings import SettingsTab


class ConfigPanelApp(App):
    """Config panel editing config.json and the antilink policy file."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.config_state = ConfigState()

    BINDINGS = [
        ("ctrl+s", "save_config", "Save"),
        ("ctrl+r", "reload_config", "Reload"),
        ("q", "request_quit", "Quit"),
        ("ctrl+c", "request_quit", "Quit"),
    ]

    CSS = """
    Screen {
        background: #0f1a14;
        color: #e8f5ec;
    }

    #header {
        height: 8;
        padding: 1 4;
        border-bottom: solid #2a4636;
    }

    #header-row {
        height: 6;
    }

    #header-left, #header-right {
        width: 1fr;
    }

    #header-right {
        content-align: right top;
        text-align: right;
    }

    #header-actions {
        height: 3;
        align: right top;
    }

    #title {
        text-style: bold;
    }

    .subtle {
        color: #c6ddd0;
    }

    .status-loaded {
        color: #25D366;
    }

    .status-modified {
        color: #f5c542;
    }

    .status-error {
        color: #ef5350;
    }

    #tabs-bar {
        height: 5;
        padding: 0 4;
        border-bottom: solid #2a4636;
        align: center middle;
    }

    #tabs-center {
        width: 100%;
        height: 4;
        align: center middle;
    }

    #tabs {
        width: auto;
        min-width: 0;
        padding: 0;
    }

    Tab {
        height: 3;
        text-style: bold;
    }

    #content {
        height: 1fr;
        padding: 1 4;
    }

    #groups-body, #settings-body {
        height: 1fr;
    }

    #groups-left, #settings-left {
        width: 1fr;
    }

    #groups-right, #settings-right {
        width: 1fr;
        padding: 0 2;
    }

    #groups-actions {
        height: 3;
    }

    .form-label {
        color: #c6ddd0;
        margin-top: 1;
    }

    .settings-title, #groups-title {
        text-style: bold;
    }

    .settings-error, .modal-error {
        color: #ef5350;
    }

    #logging-redact-patterns {
        height: 6;
    }

    .modal-dialog {
        width: 60;
        height: auto;
        padding: 1 2;
        border: round #2a4636;
        background: #142019;
    }

    .modal-title {
        text-style: bold;
    }

    .modal-actions {
        height: 3;
        margin-top: 1;
    }

    ModalScreen {
        align: center middle;
    }
    """

    def compose(self) -> ComposeResult:
        with Container(id="header"):
            with Horizontal(id="header-row"):
                with Vertical(id="header-left"):
                    yield Static(self._title_text(), id="title")
                    yield Static("antilink + store commands", classes="subtle")
                with Vertical(id="header-right"):
                    yield Static("", id="header-policy", classes="subtle")
                    yield Static("", id="header-status")
                    yield Horizontal(
                        Button("Save", id="save-btn"),
                        Button("Reload", id="reload-btn"),
                        id="header-actions",
                    )

        with Container(id="tabs-bar"):
            with Center(id="tabs-center"):
                yield Tabs(
                    Tab("Groups", id="groups"),
                    Tab("Settings", id="settings"),
                    id="tabs",
                )

        with ContentSwitcher(id="content"):
            yield GroupsTab(id="groups")
            yield SettingsTab(id="settings")
        yield Footer()

    def on_mount(self) -> None:
        self._load_config()
        self._set_active_tab("groups")

    def on_tabs_tab_activated(self, event: Tabs.TabActivated) -> None:
        tab_id = event.tab.id or ""
        if not tab_id:
            label = event.tab.label
            if hasattr(label, "plain"):
                label = label.plain
            tab_id = str(label).strip().lower()
        self._set_active_tab(tab_id)

    def _set_active_tab(self, tab_id: str) -> None:
        switcher = self.query_one("#content", ContentSwitcher)
        switcher.current = tab_id

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "save-btn":
            self.action_save_config()
        elif event.button.id == "reload-btn":
            self.action_reload_config()

    def action_save_config(self) -> None:
        self._save_config()

    def action_reload_config(self) -> None:
        self._guard_unsaved(reload_confirm_screen(), "reload", self._load_config)

    def action_request_quit(self) -> None:
        self._guard_unsaved(unsaved_changes_screen(), "discard", self.exit)

    def _guard_unsaved(self, screen: ModalScreen[str], skip_save: str, proceed: Callable[[], Any]) -> None:
        """Run ``proceed`` now, or after the user saves or skips saving."""

        if not self.config_state.dirty:
            proceed()
            return

        def on_choice(choice: str | None) -> None:
            if choice == "save" and self._save_config():
                proceed()
            elif choice == skip_save:
                proceed()

        self.push_screen(screen, on_choice)

    def policy_path(self) -> Path:
        """Resolve the antilink policy file named in config.json."""

        policy_cfg = (self.config_state.data or {}).get("policy", {})
        raw = DEFAULT_POLICY_PATH
        if isinstance(policy_cfg, dict) and policy_cfg.get("path"):
            raw = str(policy_cfg["path"])
        path = Path(raw)
        if not path.is_absolute():
            path = PROJECT_ROOT / path
        return path

    def _load_config(self) -> None:
        try:
            loaded = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
            if not isinstance(loaded, dict):
                raise ValueError("config root must be an object")
            self.config_state.data = loaded
            self.config_state.error = None
        except FileNotFoundError:
            self.config_state.data = None
            self.config_state.error = "config.json missing"
        except json.JSONDecodeError as exc:
            self.config_state.data = None
            self.config_state.error = f"config.json error: {exc.msg}"
        except ValueError as exc:
            self.config_state.data = None
            self.config_state.error = str(exc)
        self.config_state.dirty = False
        self._load_policies()
        self._refresh_header()
        self._refresh_tabs()

    def _load_policies(self) -> None:
        policies, error = read_policy_file(self.policy_path())
        self.config_state.policies = policies
        if error:
            self.config_state.error = error

    def _save_config(self) -> bool:
        if self.config_state.data is None:
            self.config_state.error = "Nothing to save"
            self._refresh_header()
            return False
        policy_path = self.policy_path()
        try:
            CONFIG_PATH.write_text(
                json.dumps(self.config_state.data, indent=2, ensure_ascii=False) + "\n",
                encoding="utf-8",
            )
            policy_path.parent.mkdir(parents=True, exist_ok=True)
            policy_path.write_text(
                json.dumps(self.config_state.policies, indent=2) + "\n",
                encoding="utf-8",
            )
        except OSError as exc:
            self.config_state.error = f"save failed: {exc.strerror or exc}"
            self._refresh_header()
            return False
        self.config_state.dirty = False
        self.config_state.error = None
        self._refresh_header()
        return True

    def mark_dirty(self) -> None:
        self.config_state.dirty = True
        self._refresh_header()

    def _refresh_header(self) -> None:
        status = self.query_one("#header-status", Static)
        policy_label = self.query_one("#header-policy", Static)
        save_btn = self.query_one("#save-btn", Button)

        policy_label.update(f"policy: {self.policy_path().name}")
        status.remove_class("status-loaded", "status-modified", "status-error")
        if self.config_state.error:
            status.update(f"config: {self.config_state.error}")
            status.add_class("status-error")
        elif self.config_state.dirty:
            status.update("config: modified *")
            status.add_class("status-modified")
        else:
            status.update("config: loaded")
            status.add_class("status-loaded")

        save_btn.disabled = self.config_state.data is None or not self.config_state.dirty

    def _refresh_tabs(self) -> None:
        for tab_type in (GroupsTab, SettingsTab):
            try:
                tab = self.query_one(tab_type)
            except Exception:
                continue
            tab.reload_from_config()

    def update_config_section(self, section: str, value: Any) -> None:
        """Update a config section in memory and mark dirty."""
        if self.config_state.data is None:
            self.config_state.data = {}
        self.config_state.data[section] = value
        self.mark_dirty()

    @staticmethod
    def _title_text() -> Text:
        return Text.assemble(
            ("GROUP", ACCENT_GREEN),
            ("WARDEN > Config Panel", "bold"),
        )
