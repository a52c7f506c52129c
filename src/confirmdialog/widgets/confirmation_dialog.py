"""Confirmation dialog control for Textual apps."""

import logging
from functools import partial
from pathlib import Path
from typing import Any

from textual.message import Message
from textual.widget import Widget

from confirmdialog.config import DialogSettings
from confirmdialog.confirmer import ConfirmerInstance
from confirmdialog.controller import ConfirmerFactory, DialogController
from confirmdialog.models import Handler, Params, TextSource
from confirmdialog.screens.confirm import ConfirmerScreen
from confirmdialog.widgets.confirmer_panel import ConfirmerPanel

logger = logging.getLogger(__name__)


class ConfirmationDialog(Widget):
    """Hosts any number of named confirmers behind one dispatch entry point.

    Register flows with ``define_confirmer`` and trigger them with a
    ``confirm<Name>`` signal, either by calling ``signal``, by posting
    ``ConfirmationDialog.Signal`` to the widget, or from a binding bound to
    ``signal('confirmName')``.

    In ajax mode the prompt is mounted inline as a ``ConfirmerPanel``;
    otherwise a ``ConfirmerScreen`` is pushed over the whole screen.  After
    each answer the dialog posts ``Confirmed`` or ``Cancelled``.
    """

    class Signal(Message):
        """Request to show the confirmer named by *signal_id*."""

        def __init__(self, signal_id: str, params: Params | None = None) -> None:
            super().__init__()
            self.signal_id = signal_id
            self.params = dict(params or {})

    class Confirmed(Message):
        """Posted after a confirmer's handler has run."""

        def __init__(self, name: str, params: dict[str, Any]) -> None:
            super().__init__()
            self.name = name
            self.params = params

    class Cancelled(Message):
        """Posted when the user declines a confirmer."""

        def __init__(self, name: str) -> None:
            super().__init__()
            self.name = name

    DEFAULT_CSS = """
    ConfirmationDialog {
        height: auto;
    }
    """

    def __init__(
        self,
        settings: DialogSettings | None = None,
        *,
        factory: ConfirmerFactory | None = ConfirmerInstance.activate,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.controller = DialogController.from_settings(
            settings or DialogSettings(), factory, self._redraw
        )
        self._modal: ConfirmerScreen | None = None

    # Controller pass-throughs

    def define_confirmer(
        self,
        name: str,
        handler: Handler,
        question: TextSource,
        heading: TextSource,
    ) -> "ConfirmationDialog":
        self.controller.define_confirmer(name, handler, question, heading)
        return self

    def show_confirm(self, name: str, params: Params | None = None) -> None:
        self.controller.activate(name, params)

    def signal(self, signal_id: str, **params: Any) -> None:
        self.controller.dispatch_signal(signal_id, params)

    def reset(self) -> "ConfirmationDialog":
        self.controller.reset()
        return self

    def enable_ajax(self) -> "ConfirmationDialog":
        self.controller.enable_ajax()
        return self

    def disable_ajax(self) -> "ConfirmationDialog":
        self.controller.disable_ajax()
        return self

    def set_layout_file(self, path: str | Path | None) -> "ConfirmationDialog":
        self.controller.set_layout_file(path)
        return self

    def set_template_file(self, path: str | Path | None) -> "ConfirmationDialog":
        self.controller.set_template_file(path)
        return self

    # Inbound

    def action_signal(self, signal_id: str, params: dict[str, Any] | None = None) -> None:
        self.controller.dispatch_signal(signal_id, params)

    def on_confirmation_dialog_signal(self, message: "ConfirmationDialog.Signal") -> None:
        message.stop()
        self.controller.dispatch_signal(message.signal_id, message.params)

    def on_confirmer_panel_answered(self, event: ConfirmerPanel.Answered) -> None:
        event.stop()
        if event.panel.state.name != self._active_name():
            return
        self._answer(event.confirmed)

    def _on_screen_answer(self, screen: ConfirmerScreen, confirmed: bool | None) -> None:
        if screen is not self._modal:
            return
        self._modal = None
        self._answer(bool(confirmed))

    def _active_name(self) -> str | None:
        active = self.controller.active
        return active.name if active is not None else None

    def _answer(self, confirmed: bool) -> None:
        instance = self.controller.active
        if instance is None:
            return
        params = dict(instance.params)
        if confirmed:
            self.controller.confirm()
            self.post_message(self.Confirmed(instance.name, params))
        else:
            self.controller.reset()
            self.post_message(self.Cancelled(instance.name))

    # Rendering

    def on_mount(self) -> None:
        # Catch up with activations made before the widget was mounted.
        # is_mounted only turns True once this handler returns.
        self._render_prompt()

    def _redraw(self) -> None:
        if not self.is_mounted:
            return
        self._render_prompt()

    def _render_prompt(self) -> None:
        """Discard the current prompt and render the pending confirmer, if any.

        The body is rendered before anything is removed, so a template error
        leaves the previous prompt on screen.
        """
        state = self.controller.render_state()
        body = self.controller.render() if state is not None else ""
        self._clear_prompt()
        if state is None:
            return
        if state.ajax:
            self.mount(ConfirmerPanel(state, body))
        else:
            screen = ConfirmerScreen(state, body)
            self._modal = screen
            self.app.push_screen(screen, partial(self._on_screen_answer, screen))
        logger.debug("Rendered confirmer %r (ajax=%s)", state.name, state.ajax)

    def _clear_prompt(self) -> None:
        self.query(ConfirmerPanel).remove()
        screen, self._modal = self._modal, None
        if screen is not None and screen.is_current:
            self.app.pop_screen()
