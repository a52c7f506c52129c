"""Confirmer screen: full-screen yes/no modal for non-ajax dialogs."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Static

from confirmdialog.models import RenderState


class ConfirmerScreen(ModalScreen[bool]):
    """Modal that asks the user to confirm the pending confirmer.

    Dismisses with True on confirm, False on cancel.
    """

    BINDINGS = [
        Binding("escape", "cancel", show=False),
        Binding("y", "confirm", show=False),
        Binding("n", "cancel", show=False),
    ]

    DEFAULT_CSS = """
    ConfirmerScreen {
        align: center middle;
    }

    ConfirmerScreen > Vertical {
        width: 60;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: thick $error;
    }

    ConfirmerScreen #confirmer-buttons {
        height: auto;
        align: center middle;
        margin-top: 1;
    }

    ConfirmerScreen Button {
        margin: 0 1;
    }
    """

    def __init__(self, state: RenderState, body: str) -> None:
        super().__init__()
        self.state = state
        self._prompt = body

    def compose(self) -> ComposeResult:
        with Vertical(id="confirmer-container"):
            yield Static(self._prompt, id="confirmer-body")
            with Horizontal(id="confirmer-buttons"):
                yield Button("Yes", variant="error", id="confirmer-yes")
                yield Button("No", variant="primary", id="confirmer-no")

    def on_mount(self) -> None:
        self.query_one("#confirmer-no", Button).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "confirmer-yes")

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)
