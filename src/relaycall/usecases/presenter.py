"""ResultPresenter - turns a presented result into an awaitable value."""

from __future__ import annotations

import asyncio
from typing import Any

from relaycall.models.results import Result


class ResultPresenter:
    """Implements Presenter. Await ``as_result()`` after ``execute``."""

    def __init__(self) -> None:
        self._future: asyncio.Future[Result[Any, Any]] | None = None

    def _get_future(self) -> asyncio.Future[Result[Any, Any]]:
        if self._future is None:
            self._future = asyncio.get_running_loop().create_future()
        return self._future

    def present(self, result: Result[Any, Any]) -> None:
        future = self._get_future()
        if future.done():
            raise RuntimeError("result already presented")
        future.set_result(result)

    async def as_result(self) -> Result[Any, Any]:
        return await self._get_future()
