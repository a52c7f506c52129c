"""Domain models."""

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from confirmdialog.confirmer import ConfirmerInstance

NAME_PATTERN = re.compile(r"[A-Za-z_]+")

Params = Mapping[str, Any]
Handler = Callable[[dict[str, Any]], object]
# Literal text, or a callback (instance, params) -> text.
TextSource = Union[str, Callable[["ConfirmerInstance", Params], str]]


def is_valid_name(name: object) -> bool:
    """Return True if *name* is a string made only of letters and underscores."""
    return isinstance(name, str) and NAME_PATTERN.fullmatch(name) is not None


@dataclass
class ConfirmerDefinition:
    """Static configuration of one named confirmation flow.

    A definition starts empty and becomes usable once handler, heading and
    question have been assigned together by the registry.
    """

    name: str
    handler: Handler | None = None
    heading: TextSource | None = None
    question: TextSource | None = None
    configured: bool = False


class LookupStatus(Enum):
    FOUND = auto()
    NOT_FOUND = auto()
    UNCONFIGURED = auto()


@dataclass(frozen=True)
class Lookup:
    """Result of a registry lookup; ``definition`` is None only when NOT_FOUND."""

    status: LookupStatus
    definition: ConfirmerDefinition | None = None

    @property
    def found(self) -> bool:
        return self.status is LookupStatus.FOUND


@dataclass(frozen=True)
class RenderState:
    """What the view layer receives for the active confirmer."""

    name: str
    heading: str
    question: str
    params: Mapping[str, Any] = field(default_factory=dict)
    ajax: bool = True
