"""Tests for the lifecycle event dispatcher."""

from unittest.mock import MagicMock

import pytest

from commandtree.core.events import EventDispatcher, HookPairEvent, NotificationEvent
from commandtree.core.exceptions import ConfigurationError


class TestBind:
    """Tests for bind()."""

    def test_bind_notification(self, dispatcher):
        """A notification event accepts listeners without a phase."""
        listener = MagicMock()

        assert dispatcher.bind("job:missing", listener) is True
        assert dispatcher.get("job:missing").listeners == [listener]

    def test_bind_notification_with_phase_is_noop(self, dispatcher):
        """A phase on a notification event is ignored."""
        assert dispatcher.bind("job:missing", MagicMock(), phase="before") is False
        assert dispatcher.get("job:missing").listeners == []

    def test_hook_phases_created_on_first_bind(self, dispatcher):
        """Both phase lists appear on the first bind."""
        event = dispatcher.get("job:run")
        assert event.before is None
        assert event.after is None

        listener = MagicMock()
        dispatcher.bind("job:run", listener, phase="after")

        assert event.before == []
        assert event.after == [listener]

    @pytest.mark.parametrize("phase", [None, "during"])
    def test_hook_without_valid_phase_is_noop(self, dispatcher, phase):
        """A hook-pair event needs "before" or "after"."""
        assert dispatcher.bind("job:run", MagicMock(), phase=phase) is False
        assert dispatcher.get("job:run").before is None

    def test_bind_unknown_event_is_noop(self, dispatcher):
        """Binding to an undeclared event does not raise."""
        assert dispatcher.bind("plugin:loaded", MagicMock()) is False
        assert "plugin:loaded" not in dispatcher.event_names


class TestFireNotification:
    """Tests for firing notification events."""

    def test_listeners_receive_context_and_args(self, dispatcher):
        """Listeners are called with the context followed by the args."""
        listener = MagicMock(return_value=None)
        dispatcher.bind("job:missing", listener)

        assert dispatcher.fire("job:missing", "a", 1) is True
        listener.assert_called_once_with("ctx", "a", 1)

    def test_runs_in_registration_order(self, dispatcher):
        """Listeners run in the order they were bound."""
        calls = []
        dispatcher.bind("job:missing", lambda ctx: calls.append(1))
        dispatcher.bind("job:missing", lambda ctx: calls.append(2))

        dispatcher.fire("job:missing")

        assert calls == [1, 2]

    def test_false_short_circuits(self, dispatcher):
        """A listener returning False stops the remaining listeners."""
        first = MagicMock(return_value=False)
        second = MagicMock()
        dispatcher.bind("job:missing", first)
        dispatcher.bind("job:missing", second)

        assert dispatcher.fire("job:missing") is False
        first.assert_called_once()
        second.assert_not_called()

    @pytest.mark.parametrize("value", [None, 0, "", []])
    def test_falsy_values_do_not_short_circuit(self, dispatcher, value):
        """Only exactly False stops iteration."""
        second = MagicMock()
        dispatcher.bind("job:missing", lambda ctx: value)
        dispatcher.bind("job:missing", second)

        dispatcher.fire("job:missing")

        second.assert_called_once()

    def test_action_rejected(self, dispatcher):
        """A notification event takes no main action."""
        with pytest.raises(ConfigurationError):
            dispatcher.fire("job:missing", action=lambda: None)


class TestFireHookPair:
    """Tests for firing hook-pair events."""

    def test_runs_before_action_after(self, dispatcher):
        """before listeners, then the action, then after listeners."""
        calls = []
        dispatcher.bind("job:run", lambda ctx, x: calls.append(("before", x)), phase="before")
        dispatcher.bind("job:run", lambda ctx, x: calls.append(("after", x)), phase="after")

        completed = dispatcher.fire("job:run", 7, action=lambda: calls.append("action"))

        assert completed is True
        assert calls == [("before", 7), "action", ("after", 7)]

    def test_no_listeners_runs_action(self, dispatcher):
        """An event with no listeners still runs its action."""
        action = MagicMock()

        assert dispatcher.fire("job:run", action=action) is True
        action.assert_called_once_with()

    def test_before_false_cancels(self, dispatcher):
        """A before listener returning False skips the action and after phase."""
        action = MagicMock()
        later_before = MagicMock()
        after = MagicMock()
        dispatcher.bind("job:run", lambda ctx: False, phase="before")
        dispatcher.bind("job:run", later_before, phase="before")
        dispatcher.bind("job:run", after, phase="after")

        assert dispatcher.fire("job:run", action=action) is False
        action.assert_not_called()
        later_before.assert_not_called()
        after.assert_not_called()

    @pytest.mark.parametrize("value", [None, True, 0, ""])
    def test_before_other_values_allow(self, dispatcher, value):
        """Any return value other than False lets the action run."""
        action = MagicMock()
        dispatcher.bind("job:run", lambda ctx: value, phase="before")

        assert dispatcher.fire("job:run", action=action) is True
        action.assert_called_once()

    def test_after_return_values_ignored(self, dispatcher):
        """after listeners cannot stop one another."""
        second = MagicMock()
        dispatcher.bind("job:run", lambda ctx: False, phase="after")
        dispatcher.bind("job:run", second, phase="after")

        assert dispatcher.fire("job:run", action=lambda: None) is True
        second.assert_called_once_with("ctx")

    def test_missing_action_rejected(self, dispatcher):
        """A hook-pair event requires a main action."""
        with pytest.raises(ConfigurationError):
            dispatcher.fire("job:run")

    def test_listener_exception_propagates(self, dispatcher):
        """An exception in the action aborts the fire before the after phase."""
        action = MagicMock(side_effect=RuntimeError("boom"))
        after = MagicMock()
        dispatcher.bind("job:run", after, phase="after")

        with pytest.raises(RuntimeError, match="boom"):
            dispatcher.fire("job:run", action=action)
        after.assert_not_called()

    def test_nested_fire_from_listener(self, dispatcher):
        """A listener may fire other events on the same dispatcher."""
        missing = MagicMock()
        dispatcher.bind("job:missing", missing)
        dispatcher.bind(
            "job:run", lambda ctx: dispatcher.fire("job:missing", "nested"), phase="before"
        )

        dispatcher.fire("job:run", action=lambda: None)

        missing.assert_called_once_with("ctx", "nested")


class TestUnknownEvent:
    """Tests for firing undeclared events."""

    def test_fire_unknown_raises(self, dispatcher):
        """Firing an undeclared event is a configuration error."""
        with pytest.raises(ConfigurationError) as exc_info:
            dispatcher.fire("plugin:loaded")

        assert exc_info.value.event_name == "plugin:loaded"
        assert "plugin:loaded" in str(exc_info.value)


class TestDeclare:
    """Tests for dispatcher construction."""

    def test_declare_builds_tagged_events(self):
        """declare() makes one event object per name with the right shape."""
        dispatcher = EventDispatcher.declare(hook_pairs=["a"], notifications=["b"])

        assert isinstance(dispatcher.get("a"), HookPairEvent)
        assert isinstance(dispatcher.get("b"), NotificationEvent)
        assert dispatcher.event_names == frozenset({"a", "b"})

    def test_event_set_is_read_only(self):
        """The declared event mapping cannot be extended."""
        dispatcher = EventDispatcher([NotificationEvent("a")])

        with pytest.raises(TypeError):
            dispatcher._events["b"] = NotificationEvent("b")


def test_before_listener_exception_propagates(dispatcher):
    """A raising before listener stops the action from running."""
    action = MagicMock()

    def explode(ctx):
        raise ValueError("veto failed")

    dispatcher.bind("job:run", explode, phase="before")

    with pytest.raises(ValueError, match="veto failed"):
        dispatcher.fire("job:run", action=action)
    action.assert_not_called()


def test_duplicate_event_name_rejected():
    """Declaring one name as two shapes is a configuration error."""
    with pytest.raises(ConfigurationError) as exc_info:
        EventDispatcher.declare(hook_pairs=["a"], notifications=["a"])

    assert exc_info.value.event_name == "a"
