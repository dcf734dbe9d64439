"""Custom exceptions for commandtree."""


class ConfigurationError(Exception):
    """Raised when an event that was never declared is fired."""

    def __init__(self, event_name: str, reason: str | None = None):
        message = reason or f"Event '{event_name}' is not declared"
        super().__init__(message)
        self.event_name = event_name


class InvalidInputError(ValueError):
    """Raised when a command address yields no tokens."""
    pass
