"""Inline yes/no prompt mounted inside the dialog slot (ajax mode)."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.widgets import Button, Static

from confirmdialog.models import RenderState


class ConfirmerPanel(Vertical):
    """Partial-update rendition of a pending confirmer.

    Unlike ``ConfirmerScreen`` it does not take over the screen; it is mounted
    into the owning ``ConfirmationDialog`` and reports the answer by posting
    ``ConfirmerPanel.Answered``.
    """

    class Answered(Message):
        """Posted when the user answers the prompt."""

        def __init__(self, panel: "ConfirmerPanel", confirmed: bool) -> None:
            super().__init__()
            self.panel = panel
            self.confirmed = confirmed

    BINDINGS = [
        Binding("escape", "cancel", show=False),
        Binding("y", "confirm", show=False),
        Binding("n", "cancel", show=False),
    ]

    DEFAULT_CSS = """
    ConfirmerPanel {
        height: auto;
        padding: 0 1;
        border: round $error;
    }

    ConfirmerPanel .confirmer-buttons {
        height: auto;
    }

    ConfirmerPanel Button {
        margin: 0 1;
    }
    """

    def __init__(self, state: RenderState, body: str) -> None:
        super().__init__(classes="confirmer-panel")
        self.state = state
        self._prompt = body

    def compose(self) -> ComposeResult:
        yield Static(self._prompt, classes="confirmer-body")
        with Horizontal(classes="confirmer-buttons"):
            yield Button("Yes", variant="error", id="confirmer-yes")
            yield Button("No", variant="primary", id="confirmer-no")

    def on_mount(self) -> None:
        self.query_one("#confirmer-no", Button).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.post_message(self.Answered(self, event.button.id == "confirmer-yes"))

    def action_confirm(self) -> None:
        self.post_message(self.Answered(self, True))

    def action_cancel(self) -> None:
        self.post_message(self.Answered(self, False))
