"""Single-flight memoisation for expensive async loads."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Generic, Optional, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class SingleFlight(Generic[T]):
    """Run an async factory at most once at a time and cache its result.

    The cell is empty, in flight, or holding a value. Callers arriving while a
    load is in flight await that same load. A failed load empties the cell so
    the next caller starts a fresh attempt; every caller that was waiting on
    the failed attempt sees its exception. After ``reset`` an attempt already
    in flight still settles its own callers but no longer touches the cell.
    """

    def __init__(self, factory: Callable[[], Awaitable[T]], name: str = "load"):
        self._factory = factory
        self._name = name
        self._task: Optional[asyncio.Future[T]] = None
        self._value: Optional[T] = None
        self._loaded = False
        # Bumped by reset(); attempts started before it leave the cell alone
        self._generation = 0

    @property
    def loaded(self) -> bool:
        return self._loaded

    async def get(self) -> T:
        if self._loaded:
            return self._value  # type: ignore[return-value]
        if self._task is None:
            logger.debug("Starting %s", self._name)
            self._task = asyncio.ensure_future(self._run(self._generation))
        # A cancelled caller must not cancel the load other callers are sharing
        return await asyncio.shield(self._task)

    async def _run(self, generation: int) -> T:
        try:
            value = await self._factory()
        except BaseException:
            if generation == self._generation:
                logger.debug("%s failed; cleared for retry", self._name)
                self._task = None
            raise
        if generation == self._generation:
            self._value = value
            self._loaded = True
            self._task = None
        else:
            logger.debug("Discarding %s result started before reset", self._name)
        return value

    def reset(self) -> None:
        self._generation += 1
        self._task = None
        self._value = None
        self._loaded = False
