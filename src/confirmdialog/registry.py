"""Registry of named confirmation flows."""

import logging

from confirmdialog.errors import (
    AlreadyConfiguredError,
    DuplicateNameError,
    InvalidNameError,
    NotFoundError,
)
from confirmdialog.models import (
    ConfirmerDefinition,
    Handler,
    Lookup,
    LookupStatus,
    TextSource,
    is_valid_name,
)

logger = logging.getLogger(__name__)


class ConfirmerRegistry:
    """Owns the name → ConfirmerDefinition mapping of one dialog control.

    Names are unique and made of letters and underscores.  A definition can
    be configured exactly once; until then it is invisible to ``get``.
    """

    def __init__(self) -> None:
        self._entries: dict[str, ConfirmerDefinition] = {}

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def names(self) -> list[str]:
        """Return every registered name in registration order."""
        return list(self._entries)

    def configured_names(self) -> list[str]:
        return [name for name, definition in self._entries.items() if definition.configured]

    def register(self, name: str) -> ConfirmerDefinition:
        """Create an empty, unconfigured definition under *name*."""
        if not is_valid_name(name):
            raise InvalidNameError(f"Confirmer name {name!r} contains invalid characters.")
        if name in self._entries:
            raise DuplicateNameError(f"Confirmer '{name}' is already registered.")
        definition = ConfirmerDefinition(name=name)
        self._entries[name] = definition
        logger.debug("Registered confirmer %r", name)
        return definition

    def configure(
        self,
        name: str,
        handler: Handler,
        question: TextSource,
        heading: TextSource,
    ) -> None:
        """Assign handler, question and heading to *name* and mark it configured."""
        definition = self._entries.get(name) if isinstance(name, str) else None
        if definition is None:
            raise NotFoundError(f"Confirmer '{name}' is not registered.")
        if definition.configured:
            raise AlreadyConfiguredError(f"Confirmer '{name}' is already configured.")
        definition.handler = handler
        definition.question = question
        definition.heading = heading
        definition.configured = True
        logger.debug("Configured confirmer %r", name)

    def lookup(self, name: str) -> Lookup:
        """Return a tagged lookup result without raising."""
        definition = self._entries.get(name) if isinstance(name, str) else None
        if definition is None:
            return Lookup(LookupStatus.NOT_FOUND)
        if not definition.configured:
            return Lookup(LookupStatus.UNCONFIGURED, definition)
        return Lookup(LookupStatus.FOUND, definition)

    def get(self, name: str) -> ConfirmerDefinition:
        """Return the configured definition for *name*.

        Missing and unconfigured names raise the same NotFoundError; use
        ``lookup`` to tell them apart.
        """
        result = self.lookup(name)
        if not result.found or result.definition is None:
            raise NotFoundError(f"Confirmer '{name}' does not exist.")
        return result.definition
