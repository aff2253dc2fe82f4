"""fieldstore exceptions."""


class FieldStoreError(Exception):
    """Base exception for fieldstore."""

    pass


class InvalidArgumentError(FieldStoreError, ValueError):
    """A required key or field identifier was missing."""

    pass


class NoBackupAvailableError(FieldStoreError, LookupError):
    """No snapshot exists at or before the requested restore time."""

    pass


class ConfigError(FieldStoreError):
    """Configuration error."""

    pass
