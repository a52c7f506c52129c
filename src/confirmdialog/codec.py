"""Mapping between dynamic ``confirm<Name>`` signal ids and confirmer names.

Every signal whose handler token starts with ``confirm`` is routed to one
shared dispatcher; these functions recover which confirmer was meant::

    decode("confirmDeleteItem")         -> "deleteItem"
    decode("dialog.confirmDeleteItem")  -> "deleteItem"
    encode("deleteItem")                -> "confirmDeleteItem"

The handler token is whatever follows the last ``.`` (the Textual action
namespace separator).
"""

from confirmdialog.errors import InvalidSignalError
from confirmdialog.models import is_valid_name

SIGNAL_PREFIX = "confirm"
NAMESPACE_SEPARATOR = "."


def handler_token(signal_id: str) -> str:
    """Return the part of *signal_id* after its namespace, if any."""
    return signal_id.rpartition(NAMESPACE_SEPARATOR)[2]


def is_confirm_signal(signal_id: object) -> bool:
    """Return True if *signal_id* should be routed to the shared dispatcher."""
    return isinstance(signal_id, str) and handler_token(signal_id).startswith(SIGNAL_PREFIX)


def decode(signal_id: str) -> str:
    """Return the confirmer name carried by *signal_id*."""
    if not is_confirm_signal(signal_id):
        raise InvalidSignalError(f"Signal {signal_id!r} is not a confirmation signal.")
    suffix = handler_token(signal_id)[len(SIGNAL_PREFIX) :]
    if not suffix:
        raise InvalidSignalError(f"Signal {signal_id!r} does not name a confirmer.")
    name = suffix[0].lower() + suffix[1:]
    if not is_valid_name(name):
        raise InvalidSignalError(f"Signal {signal_id!r} carries an invalid confirmer name.")
    return name


def encode(name: str) -> str:
    """Return the signal id that activates confirmer *name*."""
    if not is_valid_name(name):
        raise InvalidSignalError(f"Cannot build a signal for confirmer {name!r}.")
    return SIGNAL_PREFIX + name[0].upper() + name[1:]
