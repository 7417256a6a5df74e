"""
Kargah Command Layer — Command Bus
====================================
Single entry point between the workshop session and the engines.

Each engine service registers the request types it owns; ``handle``
looks up the owner of ``command.command_type`` and hands the command
over. The bus holds no store and makes no decisions: a refused command
surfaces as the service's CommandRejected subclass, unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Protocol

from kargah.core.commands.base import REQUEST_SUFFIX, Command
from kargah.core.commands.errors import CommandRejected

logger = logging.getLogger("kargah.commands")


@dataclass(frozen=True)
class ExecutionResult:
    """
    What an accepted command produced.

    ``event_type`` is the versioned past-tense name
    (``inventory.part.added.v1``); ``payload`` holds the ids and
    computed figures the caller needs. ``result["part_id"]`` reads
    straight from the payload.
    """

    event_type: str
    payload: Dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        return self.payload[key]


class EngineServiceProtocol(Protocol):
    def execute(self, command: Command) -> ExecutionResult:
        ...


class NoHandlerRegistered(LookupError):
    def __init__(self, command_type: str):
        self.command_type = command_type
        super().__init__(f"Nothing registered to handle '{command_type}'.")


class CommandBus:
    """Maps request types to the engine service that executes them."""

    def __init__(self):
        self._routes: Dict[str, EngineServiceProtocol] = {}

    def register_handler(self, command_type: str, handler: EngineServiceProtocol) -> None:
        if not command_type.endswith(REQUEST_SUFFIX):
            raise ValueError(
                f"Only request types can be routed; got '{command_type}'."
            )
        if not callable(getattr(handler, "execute", None)):
            raise TypeError(
                f"{type(handler).__name__} has no execute(command) method."
            )
        self._routes[command_type] = handler
        logger.debug("Route added: %s -> %s", command_type, type(handler).__name__)

    def has_handler(self, command_type: str) -> bool:
        return command_type in self._routes

    def handle(self, command: Command) -> ExecutionResult:
        try:
            handler = self._routes[command.command_type]
        except KeyError:
            raise NoHandlerRegistered(command.command_type) from None

        try:
            result = handler.execute(command)
        except CommandRejected as exc:
            logger.debug(
                "%s refused %s [%s]: %s",
                type(handler).__name__, command.rejection_type,
                exc.code, exc.reason.message,
            )
            raise

        logger.debug("%s -> %s", command.command_type, result.event_type)
        return result
