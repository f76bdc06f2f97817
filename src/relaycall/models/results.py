"""Tagged result values exchanged between use cases and presenters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

V = TypeVar("V")
E = TypeVar("E", bound=Exception)


@dataclass(frozen=True)
class Success(Generic[V]):
    """Successful outcome, optionally carrying a value."""

    value: V = None  # type: ignore[assignment]

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def unwrap(self) -> V:
        return self.value


@dataclass(frozen=True)
class Failure(Generic[E]):
    """Failed outcome carrying the error value as-is."""

    error: E

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def unwrap(self) -> Any:
        raise self.error


Result = Union[Success[V], Failure[E]]


def success(value: Any = None) -> Success[Any]:
    return Success(value)


def failure(error: E) -> Failure[E]:
    return Failure(error)
