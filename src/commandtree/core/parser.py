"""Command address parsing."""

import re
import sys
from dataclasses import dataclass, field
from typing import Sequence

from commandtree.core.exceptions import InvalidInputError

# Zero-width split before every uppercase letter or space
_BOUNDARY = re.compile(r"(?=[A-Z ])")

# sys.argv carries the script path in its first slot
ARGV_PREFIX_SLOTS = 1


@dataclass
class ParsedInput:
    """A command address split into its namespace path and leaf text."""

    command: str
    namespace: list[str] = field(default_factory=list)

    @property
    def address(self) -> str:
        return " ".join([*self.namespace, self.command])


def tokenize(input: str) -> list[str]:
    """
    Split a camelCase and/or space separated address into lowercase tokens.

    Args:
        input: Address such as "factoryExample" or "factory example"

    Returns:
        Non-empty, trimmed, lowercased tokens in left-to-right order
    """
    tokens = (part.lower().strip() for part in _BOUNDARY.split(input))
    return [token for token in tokens if token]


def parse_input(input: str | Sequence[str]) -> ParsedInput:
    """
    Parse a command address into namespace and command text.

    A sequence is taken as already tokenized: its last item is the command
    and everything before it is the namespace. A string is tokenized first.

    Args:
        input: Address string or sequence of segments

    Returns:
        ParsedInput with the leaf command and its namespace path

    Raises:
        InvalidInputError: If the input has no tokens
    """
    if isinstance(input, str):
        tokens = tokenize(input)
    else:
        tokens = list(input)

    if not tokens:
        raise InvalidInputError(f"Cannot parse a command from empty input: {input!r}")

    return ParsedInput(command=tokens[-1], namespace=tokens[:-1])


def convert_args_to_input(
    args: str | Sequence[str] | None = None,
) -> str | list[str]:
    """
    Normalize an argument source into something parse_input accepts.

    Args:
        args: None to read the process argument vector, a string address,
            or a sequence of meaningful tokens

    Returns:
        The address string unchanged, or the tokens as a list
    """
    if args is None:
        return list(sys.argv[ARGV_PREFIX_SLOTS:])

    if isinstance(args, str):
        return args

    return list(args)
