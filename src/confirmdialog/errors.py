"""Exceptions raised by the confirmation dialog control."""


class ConfirmationDialogError(Exception):
    """Base class for every error raised by confirmdialog."""


class InvalidArgumentError(ConfirmationDialogError, ValueError):
    """Raised at the controller boundary for a bad name, handler, or signal."""


class InvalidStateError(ConfirmationDialogError, RuntimeError):
    """Raised when the control is asked to do something it is not wired for."""


class RegistryError(ConfirmationDialogError):
    """Base class for confirmer registry failures."""


class InvalidNameError(RegistryError):
    """Raised when a confirmer name is not made of letters and underscores."""


class DuplicateNameError(RegistryError):
    """Raised when a confirmer name is registered twice."""


class NotFoundError(RegistryError, LookupError):
    """Raised when a confirmer is missing or not yet configured."""


class AlreadyConfiguredError(RegistryError):
    """Raised when a confirmer is configured a second time."""


class NotConfiguredError(InvalidStateError):
    """Raised when an unconfigured confirmer is activated."""


class InvalidSignalError(ConfirmationDialogError, ValueError):
    """Raised when a signal id does not have the ``confirm<Name>`` shape."""


class ConfigError(ConfirmationDialogError):
    """Raised when the settings file exists but cannot be parsed or validated."""
