"""commandtree: command-line applications from namespaced, event-wrapped commands."""

from commandtree.core import (
    Application,
    Command,
    CommandArgument,
    CommandRegistry,
    ConfigurationError,
    EventDispatcher,
    InvalidInputError,
    parse_input,
)

__all__ = [
    "Application",
    "Command",
    "CommandArgument",
    "CommandRegistry",
    "ConfigurationError",
    "EventDispatcher",
    "InvalidInputError",
    "parse_input",
]
