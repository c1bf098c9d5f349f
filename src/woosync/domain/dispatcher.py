"""Routes actions to the one processor registered for their kind."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from woosync.domain.actions import Action
from woosync.domain.errors import (
    DispatcherFrozenError,
    ProcessorAlreadyRegisteredError,
    UnhandledActionError,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

log = getLogger(__name__)


@runtime_checkable
class ActionsProcessor(Protocol):
    async def on_action(self, action: Action) -> None: ...


class Dispatcher:
    """Registry of action kinds to processors.

    An action kind is an ``Action`` subclass; an action is handled by the processor
    registered for the nearest kind in its MRO. Registration is closed by
    ``freeze()`` once the application context is assembled.
    """

    def __init__(self, *, strict: bool = True) -> None:
        self.strict = strict
        self._processors: dict[type[Action], ActionsProcessor] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, processor: ActionsProcessor, action_kind: type[Action]) -> None:
        if self._frozen:
            raise DispatcherFrozenError(f"Cannot register {action_kind.__name__}: dispatcher frozen")
        if not issubclass(action_kind, Action):
            raise TypeError(f"{action_kind!r} is not an action kind")
        existing = self._processors.get(action_kind)
        if existing is not None:
            raise ProcessorAlreadyRegisteredError(
                f"{action_kind.__name__} is already handled by {type(existing).__name__}"
            )
        self._processors[action_kind] = processor
        log.debug("Registered %s for %s", type(processor).__name__, action_kind.__name__)

    def register_all(self, processor: ActionsProcessor, action_kinds: Iterable[type[Action]]) -> None:
        for action_kind in action_kinds:
            self.register(processor, action_kind)

    def unregister(self, processor: ActionsProcessor) -> None:
        if self._frozen:
            raise DispatcherFrozenError("Cannot unregister: dispatcher frozen")
        for action_kind in [k for k, p in self._processors.items() if p is processor]:
            del self._processors[action_kind]

    def freeze(self) -> None:
        self._frozen = True

    def processor_for(self, action_kind: type[Action]) -> ActionsProcessor | None:
        for kind in action_kind.__mro__:
            processor = self._processors.get(kind)
            if processor is not None:
                return processor
        return None

    async def dispatch(self, action: Action) -> None:
        processor = self.processor_for(type(action))
        if processor is None:
            if self.strict:
                raise UnhandledActionError(f"No processor registered for {type(action).__name__}")
            log.error("Dropping %s: no processor registered", type(action).__name__)
            return
        await processor.on_action(action)
