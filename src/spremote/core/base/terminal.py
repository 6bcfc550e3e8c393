from __future__ import annotations

import logging
from typing import Callable

from spremote.core.base.agent import Agent
from spremote.core.base.message import Message, Result

lg = logging.getLogger(__name__)


def handles(message_cls: type[Message]) -> Callable:
    """Decorator that registers a method as handler for a message type."""

    def decorator(method: Callable) -> Callable:
        method._handles_message = message_cls
        return method

    return decorator


class Terminal:
    """Base terminal: routes each Message to one device operation.

    Subclasses register handlers with @handles; handlers are inherited
    and may be overridden. Every send() is a complete request/response
    cycle, so the terminal keeps no per-call state between sends.
    """

    _handlers: dict[type[Message], str]

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        cls._handlers = {}
        for base in reversed(cls.__mro__):
            cls._handlers.update(getattr(base, "_handlers", {}))
        for name, method in vars(cls).items():
            message_cls = getattr(method, "_handles_message", None)
            if message_cls is not None:
                cls._handlers[message_cls] = name

    def __init__(self, agent: Agent) -> None:
        self._agent = agent

    def send(self, message: Message) -> Result:
        """Run the operation registered for the message's type."""
        handler_name = self._handlers.get(type(message))
        if handler_name is None:
            raise ValueError(f"unsupported message: {type(message).__name__}")
        lg.debug("%s -> %s", type(message).__name__, handler_name)
        return getattr(self, handler_name)(message)

    @property
    def supported_messages(self) -> list[type[Message]]:
        return list(self._handlers)

    def on_error(self, error: Exception) -> None:
        """Report an error raised by an operation."""
        lg.error("%s: %s", type(error).__name__, error)
