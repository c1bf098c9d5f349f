"""Shared plumbing for stores: the store protocol, action routing and completions."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from woosync.domain.errors import UnhandledActionError
from woosync.domain.result import Failure, Success

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping

    from woosync.domain.actions import Action
    from woosync.domain.dispatcher import Dispatcher
    from woosync.domain.result import ErrorCompletion, Result, ResultCompletion

type Handler = Callable[[Action], Awaitable[None]]

log = getLogger(__name__)


@runtime_checkable
class Store(Protocol):
    """Processes one family of actions against remotes and local storage."""

    def register_supported_actions(self, dispatcher: Dispatcher) -> None: ...

    async def on_action(self, action: Action) -> None: ...


async def route(handlers: Mapping[type[Action], Handler], action: Action) -> None:
    handler = handlers.get(type(action))
    if handler is None:
        raise UnhandledActionError(f"{type(action).__name__} has no handler in this store")
    await handler(action)


def complete(completion: ErrorCompletion | None, error: Exception | None = None) -> None:
    if completion is not None:
        completion(error)


def complete_result[T](completion: ResultCompletion[T] | None, result: Result[T]) -> None:
    if completion is not None:
        completion(result)


def fail[T](
    completion: ResultCompletion[T] | None, error: Exception, action: Action
) -> None:
    log.warning("%s failed: %s", type(action).__name__, error)
    complete_result(completion, Failure(error))


def succeed[T](completion: ResultCompletion[T] | None, value: T) -> None:
    complete_result(completion, Success(value))


def report(completion: ErrorCompletion | None, error: Exception, action: Action) -> None:
    log.warning("%s failed: %s", type(action).__name__, error)
    complete(completion, error)
