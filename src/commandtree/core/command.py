"""Command entity stored in the namespace tree."""

from dataclasses import dataclass
from typing import Any, Callable, Iterable

Action = Callable[[], Any]


def _noop() -> None:
    return None


@dataclass
class CommandArgument:
    """A declared parameter of a command."""

    name: str
    required: bool = True
    description: str = ""


class Command:
    """
    An addressable action with descriptive text.

    Commands compare by identity. The namespace and text are assigned when
    the command is inserted into a registry.
    """

    def __init__(
        self,
        action: Action | None = None,
        text: str = "",
        description: str = "",
        arguments: Iterable[CommandArgument] = (),
    ) -> None:
        self.action = action
        self.text = text
        self.description = description
        self.arguments: list[CommandArgument] = list(arguments)
        self.namespace: list[str] = []

    @property
    def action(self) -> Action:
        return self._action

    @action.setter
    def action(self, action: Action | None) -> None:
        if action is None:
            action = _noop
        if not callable(action):
            raise TypeError(f"Command action must be callable, got {type(action).__name__}")
        self._action = action

    @property
    def description(self) -> str:
        return self._description

    @description.setter
    def description(self, description: Any) -> None:
        self._description = str(description)

    @property
    def address(self) -> str:
        """Full space-joined address (namespace followed by text)."""
        return " ".join([*self.namespace, self.text])

    def add_argument(
        self, name: str, required: bool = True, description: str = ""
    ) -> CommandArgument:
        """Declare a parameter for this command."""
        argument = CommandArgument(name=name, required=required, description=description)
        self.arguments.append(argument)
        return argument

    def execute(self) -> Any:
        """Run the command action and return its result."""
        return self.action()

    def __repr__(self) -> str:
        return f"Command(address={self.address!r}, description={self.description!r})"
