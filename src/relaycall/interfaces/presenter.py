"""Presenter protocol - receives the outcome of a use case."""

from __future__ import annotations

from typing import Any, Protocol

from relaycall.models.results import Result


class Presenter(Protocol):

    def present(self, result: Result[Any, Any]) -> None:
        ...
