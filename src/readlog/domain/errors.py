"""Error taxonomy shared by every layer."""


class ReadlogError(Exception):
    """Base class for errors surfaced to the presentation layer."""


class ValidationError(ReadlogError):
    """User input rejected before it reaches the mutation engine."""


class StorageError(ReadlogError):
    """A gateway read or write failed. Visible state is left unchanged."""
