"""
Kargah Engines — Application Service Base
===========================================
Shared orchestration for every engine service:

    1. Command → handler resolution (by command_type)
    2. Handler validates through policies and builds a ChangeSet
    3. ChangeSet committed to the EntityStore in one step
    4. ExecutionResult returned with the derived values

Handlers never write to the store themselves; a handler that raises
leaves the store untouched.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional, Tuple

from kargah.core.commands.base import Command
from kargah.core.commands.bus import CommandBus, ExecutionResult
from kargah.core.commands.errors import CommandRejected
from kargah.core.config import EngineRules
from kargah.core.store import ChangeSet, EntityStore
from kargah.core.time import IdProvider, SequentialIdProvider

HandlerResult = Tuple[ChangeSet, dict]
Handler = Callable[[Command], HandlerResult]


class EngineService:
    ENGINE: str = ""

    def __init__(
        self,
        *,
        store: EntityStore,
        rules: Optional[EngineRules] = None,
        id_provider: Optional[IdProvider] = None,
    ):
        self._store = store
        self._rules = rules or EngineRules()
        self._ids = id_provider or SequentialIdProvider()
        self._logger = logging.getLogger(f"kargah.{self.ENGINE}")

    # ── Subclass contract ─────────────────────────────────────

    def _handlers(self) -> Dict[str, Handler]:
        raise NotImplementedError

    def _resolve_event_type(self, command_type: str) -> Optional[str]:
        raise NotImplementedError

    # ── Registration ──────────────────────────────────────────

    def register(self, bus: CommandBus) -> None:
        for command_type in sorted(self._handlers()):
            bus.register_handler(command_type, self)

    # ── Execution ─────────────────────────────────────────────

    def execute(self, command: Command) -> ExecutionResult:
        handler = self._handlers().get(command.command_type)
        event_type = self._resolve_event_type(command.command_type)
        if handler is None or event_type is None:
            raise ValueError(
                f"Unsupported {self.ENGINE} command type: {command.command_type}"
            )

        try:
            changes, payload = handler(command)
        except CommandRejected as exc:
            self._logger.info(
                "%s [%s]: %s",
                command.rejection_type,
                exc.code,
                exc.reason.message,
            )
            raise

        self._store.commit(changes)
        self._logger.info("%s %s", event_type, _describe(payload))
        return ExecutionResult(event_type=event_type, payload=payload)

    @property
    def store(self) -> EntityStore:
        return self._store

    @property
    def rules(self) -> EngineRules:
        return self._rules


def _describe(payload: dict) -> str:
    return ", ".join(
        f"{key}={value}" for key, value in payload.items()
        if not isinstance(value, (tuple, list, dict))
    )
