"""Single-shot completion results."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import NoReturn


@dataclass(frozen=True, slots=True)
class Success[T]:
    value: T

    @property
    def is_success(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Failure:
    error: Exception

    @property
    def is_success(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        raise self.error


type Result[T] = Success[T] | Failure

type ErrorCompletion = Callable[[Exception | None], None]
type ResultCompletion[T] = Callable[[Result[T]], None]
