"""Core command tree and lifecycle event functionality."""

from .application import Application
from .command import Command, CommandArgument
from .events import EventDispatcher, HookPairEvent, NotificationEvent
from .exceptions import ConfigurationError, InvalidInputError
from .parser import ParsedInput, convert_args_to_input, parse_input
from .tree import CommandRegistry, NamespaceNode

__all__ = [
    "Application",
    "Command",
    "CommandArgument",
    "CommandRegistry",
    "NamespaceNode",
    "EventDispatcher",
    "HookPairEvent",
    "NotificationEvent",
    "ConfigurationError",
    "InvalidInputError",
    "ParsedInput",
    "convert_args_to_input",
    "parse_input",
]
