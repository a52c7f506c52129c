"""Dialog controller: owns the confirmer registry and the pending confirmation.

The controller knows nothing about Textual.  The view layer hands it a
``redraw`` callback and asks it for ``render_state()`` / ``render()`` when
that callback fires.
"""

import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Protocol

from rich.markup import escape

from confirmdialog import codec
from confirmdialog.config import DialogSettings
from confirmdialog.confirmer import ConfirmerInstance
from confirmdialog.errors import (
    InvalidArgumentError,
    InvalidSignalError,
    InvalidStateError,
    NotFoundError,
    RegistryError,
)
from confirmdialog.models import (
    ConfirmerDefinition,
    Handler,
    Params,
    RenderState,
    TextSource,
    is_valid_name,
)
from confirmdialog.registry import ConfirmerRegistry

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
DEFAULT_LAYOUT_FILE = TEMPLATE_DIR / "layout.txt"
DEFAULT_TEMPLATE_FILE = TEMPLATE_DIR / "default.txt"


class ConfirmerFactory(Protocol):
    """Builds a live confirmer from a definition and activation parameters."""

    def __call__(
        self,
        definition: ConfirmerDefinition,
        params: Params | None = None,
        ajax_enabled: bool = True,
    ) -> ConfirmerInstance: ...


class DialogController:
    """Registry of confirmers plus at most one pending confirmation.

    State machine::

        Idle --activate/dispatch_signal--> Showing --confirm/reset--> Idle

    A failed activation leaves the current state untouched.
    """

    def __init__(
        self,
        factory: ConfirmerFactory | None = ConfirmerInstance.activate,
        redraw: Callable[[], None] | None = None,
        *,
        ajax: bool = True,
        layout_file: Path | None = None,
        template_file: Path | None = None,
    ) -> None:
        self.registry = ConfirmerRegistry()
        self._factory = factory
        self._redraw = redraw
        self._active: ConfirmerInstance | None = None
        self._ajax = ajax
        self._layout_file = layout_file
        self._template_file = template_file

    @classmethod
    def from_settings(
        cls,
        settings: DialogSettings,
        factory: ConfirmerFactory | None = ConfirmerInstance.activate,
        redraw: Callable[[], None] | None = None,
    ) -> "DialogController":
        return cls(
            factory,
            redraw,
            ajax=settings.ajax,
            layout_file=settings.layout_file,
            template_file=settings.template_file,
        )

    @property
    def active(self) -> ConfirmerInstance | None:
        return self._active

    @property
    def is_showing(self) -> bool:
        return self._active is not None

    @property
    def ajax(self) -> bool:
        return self._ajax

    def set_redraw(self, redraw: Callable[[], None] | None) -> None:
        self._redraw = redraw

    def _invalidate(self) -> None:
        if self._redraw is not None:
            self._redraw()

    # Registration

    def define_confirmer(
        self,
        name: str,
        handler: Handler,
        question: TextSource,
        heading: TextSource,
    ) -> "DialogController":
        """Register confirmer *name* and bind its handler, question and heading."""
        if not is_valid_name(name):
            raise InvalidArgumentError(f"Confirmer name {name!r} contains invalid characters.")
        if not callable(handler):
            raise InvalidArgumentError(f"Handler for confirmer {name!r} must be callable.")
        for label, source in (("question", question), ("heading", heading)):
            if not (isinstance(source, str) or callable(source)):
                raise InvalidArgumentError(
                    f"The {label} of confirmer {name!r} must be a string or a callable."
                )
        try:
            if name not in self.registry:
                self.registry.register(name)
            self.registry.configure(name, handler, question, heading)
        except RegistryError as exc:
            raise InvalidArgumentError(f"Confirmer {name!r} could not be created: {exc}") from exc
        return self

    def get_confirmer(self, name: str) -> ConfirmerDefinition:
        try:
            return self.registry.get(name)
        except NotFoundError as exc:
            raise InvalidArgumentError(str(exc)) from exc

    # Transitions

    def activate(self, name: str, params: Params | None = None) -> None:
        """Show confirmer *name* for *params*, replacing any pending one."""
        if not isinstance(name, str):
            raise InvalidArgumentError("Confirmer name must be a string.")
        if params is not None and not isinstance(params, Mapping):
            raise InvalidArgumentError("Confirmer params must be a mapping.")
        if self._factory is None:
            raise InvalidStateError("Confirmation control factory does not exist.")
        try:
            definition = self.registry.get(name)
        except NotFoundError as exc:
            raise InvalidStateError(f"Confirmer '{name}' does not exist.") from exc

        previous = self._active
        self._active = self._factory(definition, params, self._ajax)
        try:
            self._invalidate()
        except Exception:
            # A prompt that could not be shown must never be confirmable.
            self._active = previous
            raise

    def dispatch_signal(self, signal_id: str, params: Params | None = None) -> None:
        """Shared entry point for every ``confirm<Name>`` signal."""
        try:
            name = codec.decode(signal_id)
        except InvalidSignalError as exc:
            logger.warning("Rejecting undecodable signal %r", signal_id)
            raise InvalidArgumentError(str(exc)) from exc
        if not self.registry.lookup(name).found:
            logger.warning("Signal %r names unknown confirmer %r", signal_id, name)
            raise InvalidArgumentError("Invalid confirmation control.")
        self.activate(name, params)

    def confirm(self) -> None:
        """Run the pending confirmer's handler, then return to idle.

        If the handler activates another confirmer, that one stays pending.
        """
        instance = self._active
        if instance is None:
            raise InvalidStateError("There is no pending confirmation.")
        instance.confirm()
        if self._active is instance:
            self.reset()

    def reset(self) -> "DialogController":
        """Drop the pending confirmation and invalidate the prompt."""
        if self._active is not None:
            logger.debug("Reset confirmer %r", self._active.name)
        self._active = None
        self._invalidate()
        return self

    def enable_ajax(self) -> "DialogController":
        self._ajax = True
        return self

    def disable_ajax(self) -> "DialogController":
        self._ajax = False
        return self

    # Templates

    def set_layout_file(self, path: str | Path | None) -> "DialogController":
        """Change the dialog layout path; None restores the default."""
        self._layout_file = Path(path) if path is not None else None
        return self

    def set_template_file(self, path: str | Path | None) -> "DialogController":
        """Change the confirmer template path; None restores the default."""
        self._template_file = Path(path) if path is not None else None
        return self

    def get_layout_file(self) -> Path:
        return self._layout_file or DEFAULT_LAYOUT_FILE

    def get_template_file(self) -> Path:
        return self._template_file or DEFAULT_TEMPLATE_FILE

    # Rendering

    def render_state(self) -> RenderState | None:
        return self._active.render_state() if self._active is not None else None

    def render(self) -> str:
        """Render the pending prompt as Rich markup, or "" when idle."""
        layout = self._read_template(self.get_layout_file())
        state = self.render_state()
        if state is None:
            return ""
        template = self._read_template(self.get_template_file())
        fields = {
            "name": state.name,
            "heading": escape(state.heading),
            "question": escape(state.question),
            "params": {
                key: escape(value) if isinstance(value, str) else value
                for key, value in state.params.items()
            },
        }
        try:
            content = template.format_map(fields)
            return layout.format_map({**fields, "content": content})
        except (KeyError, IndexError, ValueError) as exc:
            raise InvalidStateError(f"Dialog template could not be rendered: {exc}") from exc

    @staticmethod
    def _read_template(path: Path) -> str:
        if not path.is_file():
            raise InvalidStateError(f"Dialog control is without template: {path}")
        return path.read_text()
