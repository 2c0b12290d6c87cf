"""Modal dialogs for the Textual config panel."""

from __future__ import annotations

from typing import Any, Sequence

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Static, Switch

from .validators import parse_chat_id

# (button label, dismiss value, button variant)
Choice = tuple[str, str, str]

EXIT_CHOICES: Sequence[Choice] = (
    ("Save", "save", "success"),
    ("Discard", "discard", "error"),
    ("Cancel", "cancel", "default"),
)
RELOAD_CHOICES: Sequence[Choice] = (
    ("Save", "save", "default"),
    ("Reload", "reload", "warning"),
    ("Cancel", "cancel", "default"),
)
DELETE_CHOICES: Sequence[Choice] = (
    ("Delete", "delete", "error"),
    ("Cancel", "cancel", "default"),
)


class ChoiceScreen(ModalScreen[str]):
    """Ask a question and dismiss with the value of the pressed button.

    Escape dismisses with "cancel".
    """

    BINDINGS = [("escape", "dismiss('cancel')", "Cancel")]

    def __init__(self, title: str, body: str, choices: Sequence[Choice]) -> None:
        super().__init__()
        self._heading = title
        self._message = body
        self._choices = tuple(choices)

    def compose(self) -> ComposeResult:
        yield Container(
            Static(self._heading, classes="modal-title"),
            Static(self._message, classes="modal-body"),
            Horizontal(
                *(
                    Button(label, id=f"choice-{value}", variant=variant)
                    for label, value, variant in self._choices
                ),
                classes="modal-actions",
            ),
            classes="modal-dialog modal-dialog--confirm",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        self.dismiss(button_id.removeprefix("choice-") or "cancel")


def unsaved_changes_screen() -> ChoiceScreen:
    return ChoiceScreen("Unsaved changes", "Save changes before exit?", EXIT_CHOICES)


def reload_confirm_screen() -> ChoiceScreen:
    return ChoiceScreen("Reload config?", "Unsaved changes will be lost.", RELOAD_CHOICES)


def delete_group_screen(chat_id: str) -> ChoiceScreen:
    return ChoiceScreen("Delete policy?", f"Remove the antilink entry for {chat_id}?", DELETE_CHOICES)


class AddGroupScreen(ModalScreen[dict[str, Any] | None]):
    """Modal form for adding an antilink policy for a group."""

    def __init__(self, existing: set[str]) -> None:
        super().__init__()
        self._existing = existing

    def compose(self) -> ComposeResult:
        yield Container(
            Static("Add group", classes="modal-title"),
            Static("", id="add-error", classes="modal-error"),
            Static("chat_id", classes="form-label"),
            Input(placeholder="-1001234567890", id="add-chat-id"),
            Static("antilink enabled", classes="form-label"),
            Switch(value=True, id="add-enabled"),
            Horizontal(
                Button("Add", id="add-confirm", variant="success"),
                Button("Cancel", id="add-cancel"),
                classes="modal-actions",
            ),
            classes="modal-dialog modal-dialog--form",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "add-cancel":
            self.dismiss(None)
            return
        if event.button.id != "add-confirm":
            return
        info = parse_chat_id(self.query_one("#add-chat-id", Input).value)
        error = self.query_one("#add-error", Static)
        if info.error or info.normalized is None:
            error.update(info.error or "invalid chat id")
            return
        if info.normalized in self._existing:
            error.update("group already has a policy")
            return
        enabled = self.query_one("#add-enabled", Switch).value
        self.dismiss({"chat_id": info.normalized, "enabled": bool(enabled)})
