"""Application object tying the command registry to lifecycle events."""

import logging
from typing import Any, Callable, Sequence

from commandtree.core.command import Action, Command, CommandArgument
from commandtree.core.events import EventDispatcher, Listener, Phase
from commandtree.core.parser import convert_args_to_input, parse_input
from commandtree.core.tree import CommandRegistry
from commandtree.utils.config import Config

logger = logging.getLogger(__name__)

CLI_RUN = "cli:run"
CLI_PARSE_ARGUMENTS = "cli:parse-arguments"
COMMAND_ADD = "command:add"
COMMAND_EXECUTE = "command:execute"
COMMAND_NOT_FOUND = "command:not-found"

HOOK_EVENTS = (CLI_RUN, CLI_PARSE_ARGUMENTS, COMMAND_ADD, COMMAND_EXECUTE)
NOTIFICATION_EVENTS = (COMMAND_NOT_FOUND,)

Factory = Callable[[Command], Action | None]


class Application:
    """
    A command-line application built from explicitly registered commands.

    Commands are registered with add_command/add_factory or their decorator
    forms, then dispatched by run(). Every registration and execution is
    wrapped in a cancellable lifecycle event.
    """

    def __init__(self, config: Config | None = None) -> None:
        self.config = config
        self.commands = CommandRegistry()
        self.events = EventDispatcher.declare(
            hook_pairs=HOOK_EVENTS,
            notifications=NOTIFICATION_EVENTS,
            context=self,
        )

        if config is not None and config.disabled_commands:
            self._disable_commands(config.disabled_commands)

    def on(self, event_name: str, listener: Listener, phase: Phase | None = None) -> bool:
        """
        Bind a listener to a lifecycle event.

        Args:
            event_name: One of the declared event names
            listener: Callable invoked as listener(app, *args); a "before"
                listener returning False cancels the wrapped operation
            phase: "before" or "after" for hook events, None for notifications

        Returns:
            True if the listener was bound
        """
        return self.events.bind(event_name, listener, phase)

    def add_command(
        self,
        input: str | Sequence[str],
        action: Action | None,
        description: str = "",
        arguments: Sequence[CommandArgument] = (),
    ) -> Command:
        """
        Register an action as a command.

        Args:
            input: Command address, e.g. "greet" or "remote add"
            action: Zero-argument callable run on execution
            description: Human readable description
            arguments: Declared parameters

        Returns:
            The created command (registered unless command:add was cancelled)
        """
        command = Command(action=action, description=description, arguments=arguments)
        return self._register(input, command)

    def add_factory(self, input: str | Sequence[str], factory: Factory) -> Command:
        """
        Register a command whose action is produced by a factory.

        The factory receives the new command so it can set the description
        and arguments, and returns the action to run.

        Args:
            input: Command address
            factory: Callable taking the command and returning its action

        Returns:
            The created command (registered unless command:add was cancelled)
        """
        command = Command()
        command.action = factory(command)
        return self._register(input, command)

    def command(
        self, input: str | Sequence[str], description: str = ""
    ) -> Callable[[Action], Action]:
        """Decorator form of add_command."""

        def decorator(action: Action) -> Action:
            self.add_command(input, action, description)
            return action

        return decorator

    def factory(self, input: str | Sequence[str]) -> Callable[[Factory], Factory]:
        """Decorator form of add_factory."""

        def decorator(factory: Factory) -> Factory:
            self.add_factory(input, factory)
            return factory

        return decorator

    def find(self, input: str | Sequence[str]) -> Command | None:
        """Look up a registered command by address."""
        return self.commands.find_one(input)

    def run(self, args: str | Sequence[str] | None = None) -> Any:
        """
        Resolve the arguments to a command and execute it.

        Args:
            args: Argument tokens or an address string; None reads sys.argv

        Returns:
            The command's result, or None if nothing was executed
        """
        state: dict[str, Any] = {"result": None}

        def execute() -> None:
            resolved: dict[str, Any] = {}

            def parse_arguments() -> None:
                input = convert_args_to_input(args)
                resolved["input"] = input
                resolved["command"] = self._lookup(input)

            if not self.events.fire(CLI_PARSE_ARGUMENTS, args, action=parse_arguments):
                return

            command = resolved["command"]
            if command is None:
                logger.debug(f"No command found for input {resolved['input']!r}")
                self.events.fire(COMMAND_NOT_FOUND, resolved["input"])
                return

            def run_command() -> None:
                state["result"] = command.execute()

            self.events.fire(COMMAND_EXECUTE, command, action=run_command)

        self.events.fire(CLI_RUN, args, action=execute)
        return state["result"]

    def _lookup(self, input: str | list[str]) -> Command | None:
        if not input or (isinstance(input, str) and not input.strip()):
            return None
        return self.commands.find_one(input)

    def _register(self, input: str | Sequence[str], command: Command) -> Command:
        parsed = parse_input(input)
        command.text = parsed.command
        command.namespace = parsed.namespace

        def insert() -> None:
            self.commands.add(input, command)

        if not self.events.fire(COMMAND_ADD, command, action=insert):
            logger.info(f"Registration of '{command.address}' was cancelled")
        return command

    def _disable_commands(self, addresses: Sequence[str]) -> None:
        disabled = {parse_input(address).address for address in addresses}

        def veto(app: "Application", command: Command) -> bool:
            return command.address not in disabled

        self.on(COMMAND_ADD, veto, phase="before")
