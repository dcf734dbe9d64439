# src/commandtree/core/tree.py
"""Namespace tree holding registered commands."""

import logging
from dataclasses import dataclass, field
from typing import Iterator, Sequence

from commandtree.core.command import Command
from commandtree.core.parser import parse_input

logger = logging.getLogger(__name__)


@dataclass
class NamespaceNode:
    """
    A position in the namespace tree.

    Child segments live in `children`. The `commands` slot stays None until a
    command is inserted at this exact path; after that it is only extended.
    """

    children: dict[str, "NamespaceNode"] = field(default_factory=dict)
    commands: dict[str, Command] | None = None


def _as_path(namespace: str | Sequence[str]) -> list[str]:
    if isinstance(namespace, str):
        return namespace.split()
    return list(namespace)


class CommandRegistry:
    """Hierarchical store of commands keyed by namespace path and text."""

    def __init__(self) -> None:
        self._root = NamespaceNode()

    def add(self, input: str | Sequence[str], command: Command) -> Command:
        """
        Parse a command address and insert the command at it.

        Args:
            input: Address such as "factory example" or ["factory", "example"]
            command: Command to store; its text is taken from the address

        Returns:
            The inserted command
        """
        parsed = parse_input(input)
        command.text = parsed.command
        self.insert(parsed.namespace, command)
        return command

    def insert(self, namespace: str | Sequence[str], command: Command) -> None:
        """
        Insert a command under a namespace path.

        A single-branch fragment is built for the path and deep-merged into
        the root, so unrelated branches are left untouched and only a command
        with the same path and text is replaced.

        Args:
            namespace: Path from the root to the command's parent
            command: Command to store under its text
        """
        path = _as_path(namespace)

        fragment = NamespaceNode(commands={command.text: command})
        for segment in reversed(path):
            fragment = NamespaceNode(children={segment: fragment})

        self.merge(self._root, fragment)
        command.namespace = path
        logger.debug(f"Registered command '{command.address}'")

    @classmethod
    def merge(cls, target: NamespaceNode, fragment: NamespaceNode) -> NamespaceNode:
        """
        Deep-merge a fragment into a target node in place.

        Child nodes are merged recursively, with a fresh node standing in for
        a missing target branch so fragment nodes are never shared with the
        target. Command slots are combined key by key, fragment winning.

        Args:
            target: Node receiving the merge
            fragment: Node whose branches and commands are merged in

        Returns:
            The target node
        """
        for segment, child in fragment.children.items():
            existing = target.children.get(segment, NamespaceNode())
            target.children[segment] = cls.merge(existing, child)

        if fragment.commands is not None:
            if target.commands is None:
                target.commands = {}
            target.commands.update(fragment.commands)

        return target

    def find_all(self, namespace: str | Sequence[str]) -> dict[str, Command]:
        """
        Get every command stored directly under a namespace.

        Args:
            namespace: Space-separated path or sequence of segments

        Returns:
            Mapping of command text to Command; empty if the path is unknown
        """
        node: NamespaceNode | None = self._root
        for segment in _as_path(namespace):
            node = node.children.get(segment)
            if node is None:
                return {}

        if not node.commands:
            return {}
        return dict(node.commands)

    def find_one(
        self, input: str | Sequence[str], text: str | None = None
    ) -> Command | None:
        """
        Look up a single command.

        Called with one argument, the input is parsed as a full address.
        Called with two, they are the namespace and the command text.

        Returns:
            The matching Command, or None if there is none
        """
        if text is None:
            parsed = parse_input(input)
            namespace, text = parsed.namespace, parsed.command
        else:
            namespace = _as_path(input)

        return self.find_all(namespace).get(text)

    def iter_commands(self) -> Iterator[tuple[list[str], Command]]:
        """Yield (namespace, command) pairs depth first."""
        stack: list[tuple[list[str], NamespaceNode]] = [([], self._root)]
        while stack:
            path, node = stack.pop()
            for command in (node.commands or {}).values():
                yield path, command
            for segment, child in reversed(node.children.items()):
                stack.append(([*path, segment], child))

    def __len__(self) -> int:
        return sum(1 for _ in self.iter_commands())

