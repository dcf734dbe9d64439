"""Lifecycle event dispatching with cancellable before/after hooks."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Iterable, Literal

from commandtree.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

Phase = Literal["before", "after"]
PHASES: tuple[str, ...] = ("before", "after")

# Called as listener(context, *args); returning exactly False cancels
Listener = Callable[..., Any]
MainAction = Callable[[], Any]


class Event(ABC):
    """Base class for a declared event."""

    name: str

    @abstractmethod
    def bind(self, listener: Listener, phase: str | None = None) -> bool:
        """
        Attach a listener.

        Returns:
            True if the listener was bound, False if the form does not apply
        """
        pass

    @abstractmethod
    def dispatch(
        self, context: Any, action: MainAction | None, args: tuple[Any, ...]
    ) -> bool:
        """
        Run the listeners (and main action, if the shape has one).

        Returns:
            False if a listener cancelled the dispatch, True otherwise
        """
        pass


@dataclass
class NotificationEvent(Event):
    """An ordered listener list with no main action."""

    name: str
    listeners: list[Listener] = field(default_factory=list)

    def bind(self, listener: Listener, phase: str | None = None) -> bool:
        if phase is not None:
            return False
        self.listeners.append(listener)
        return True

    def dispatch(
        self, context: Any, action: MainAction | None, args: tuple[Any, ...]
    ) -> bool:
        if action is not None:
            raise ConfigurationError(
                self.name, f"Notification event '{self.name}' takes no main action"
            )

        for listener in list(self.listeners):
            if listener(context, *args) is False:
                logger.debug(f"Notification '{self.name}' stopped by {listener!r}")
                return False
        return True


@dataclass
class HookPairEvent(Event):
    """
    A main action wrapped by `before` and `after` listener phases.

    Both phase lists are created on the first bind. A `before` listener that
    returns exactly False cancels the main action and the `after` phase.
    """

    name: str
    before: list[Listener] | None = None
    after: list[Listener] | None = None

    def bind(self, listener: Listener, phase: str | None = None) -> bool:
        if phase not in PHASES:
            return False

        if self.before is None:
            self.before = []
        if self.after is None:
            self.after = []

        getattr(self, phase).append(listener)
        return True

    def dispatch(
        self, context: Any, action: MainAction | None, args: tuple[Any, ...]
    ) -> bool:
        if action is None:
            raise ConfigurationError(
                self.name, f"Hook event '{self.name}' requires a main action"
            )

        for listener in list(self.before or ()):
            if listener(context, *args) is False:
                logger.debug(f"Event '{self.name}' cancelled by {listener!r}")
                return False

        action()

        for listener in list(self.after or ()):
            listener(context, *args)
        return True


class EventDispatcher:
    """
    Named event bus over a closed set of declared events.

    The set of event names is fixed at construction. Binding to an unknown
    name is ignored; firing one raises ConfigurationError, as does declaring
    the same name twice.
    """

    def __init__(self, events: Iterable[Event], context: Any = None) -> None:
        declared: dict[str, Event] = {}
        for event in events:
            if event.name in declared:
                raise ConfigurationError(
                    event.name, f"Event '{event.name}' is declared more than once"
                )
            declared[event.name] = event

        self._events: MappingProxyType[str, Event] = MappingProxyType(declared)
        self.context = context

    @classmethod
    def declare(
        cls,
        hook_pairs: Iterable[str] = (),
        notifications: Iterable[str] = (),
        context: Any = None,
    ) -> "EventDispatcher":
        """Create a dispatcher from hook-pair and notification event names."""
        events: list[Event] = [HookPairEvent(name) for name in hook_pairs]
        events.extend(NotificationEvent(name) for name in notifications)
        return cls(events, context=context)

    @property
    def event_names(self) -> frozenset[str]:
        return frozenset(self._events)

    def get(self, event_name: str) -> Event | None:
        return self._events.get(event_name)

    def bind(
        self, event_name: str, listener: Listener, phase: Phase | None = None
    ) -> bool:
        """
        Bind a listener to an event.

        Notification events take no phase; hook-pair events need "before" or
        "after". A mismatched form or an unknown event name is a no-op.

        Args:
            event_name: Declared event name
            listener: Callable invoked as listener(context, *args)
            phase: "before" or "after" for hook-pair events

        Returns:
            True if the listener was bound
        """
        event = self._events.get(event_name)
        if event is None:
            logger.debug(f"Ignoring listener for undeclared event '{event_name}'")
            return False

        bound = event.bind(listener, phase)
        if not bound:
            logger.debug(f"Ignoring listener for '{event_name}' with phase {phase!r}")
        return bound

    def fire(
        self, event_name: str, *args: Any, action: MainAction | None = None
    ) -> bool:
        """
        Fire an event.

        Args:
            event_name: Declared event name
            *args: Arguments passed to every listener after the context
            action: Main action, required for hook-pair events

        Returns:
            False if a listener cancelled the dispatch, True otherwise

        Raises:
            ConfigurationError: If the event is not declared or the action
                does not match the event shape
        """
        event = self._events.get(event_name)
        if event is None:
            raise ConfigurationError(event_name)

        return event.dispatch(self.context, action, args)
