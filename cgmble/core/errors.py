"""Domain-specific errors for cgmble."""


class CgmbleError(Exception):
    """Base error for cgmble."""


class ConfigError(CgmbleError):
    """Base configuration error."""


class ConfigLoadError(ConfigError):
    """Raised when the configuration file cannot be read."""


class ConfigValidationError(ConfigError):
    """Raised when the configuration does not conform to schema or semantics."""


class RadioError(CgmbleError):
    """Base radio error."""


class RadioUnavailableError(RadioError):
    """Raised when a radio session cannot be opened."""


class TransmitterError(CgmbleError):
    """Base transmitter error."""


class IdentityError(TransmitterError):
    """Raised when a connection identity write is rejected."""


class UnknownFamilyError(TransmitterError):
    """Raised when no transmitter class is registered for a family."""
