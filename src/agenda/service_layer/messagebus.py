"""Message bus routing commands to their handlers."""

import logging
from collections.abc import Callable

from agenda.domain.result import Ok

from .commands import Command

logger = logging.getLogger(__name__)


def _outcome(result: object) -> str:
    """Short label for a handler result: ``Ok`` or the error kind's name."""
    return "Ok" if isinstance(result, Ok) else type(result).__name__


# pylint: disable=too-few-public-methods


class NoHandlerForCommand(LookupError):
    """Exception raised when no handler is found for a command."""

    def __init__(self, cmd: Command) -> None:
        super().__init__(f"No handler found for command {type(cmd).__name__}")


class MessageBus:
    """A simple, synchronous message bus for handling commands.

    The message bus routes each command to its handler and returns whatever
    the handler returns (``Ok`` or an error kind). Handlers are callables that
    accept a single command argument; their collaborators (repositories,
    clock, settings) are bound beforehand by `agenda.bootstrap`.

    Args:
        command_handlers: A mapping of command types to their handlers.
    """

    def __init__(
        self,
        command_handlers: dict[type[Command], Callable[[Command], object]],
    ) -> None:
        self._command_handlers = command_handlers

    def handle(self, cmd: Command) -> object:
        """Handle a command by dispatching it to the appropriate handler.

        Args:
            cmd: The command to handle.

        Returns:
            The handler's result.

        Raises:
            NoHandlerForCommand: If no handler is found for the command type.
            Exception: If the handler raises an exception (an unclassified fault).
        """

        if handler := self._command_handlers.get(type(cmd)):
            handler_name = self._get_handler_name(handler)
            logger.debug("Handling command %s with handler %s", cmd, handler_name)
            try:
                result = handler(cmd)
            except Exception:  # pylint: disable=broad-except
                logger.exception(
                    "Exception handling command %s with handler %s", cmd, handler_name
                )
                raise
            logger.debug("%s -> %s", type(cmd).__name__, _outcome(result))
            return result
        logger.error("No handler found for command %s", type(cmd).__name__)
        raise NoHandlerForCommand(cmd)

    @staticmethod
    def _get_handler_name(fn: Callable[..., object]) -> str:
        if hasattr(fn, "__name__"):
            return fn.__name__
        if hasattr(fn, "func") and hasattr(fn.func, "__name__"):
            return fn.func.__name__
        return repr(fn)
