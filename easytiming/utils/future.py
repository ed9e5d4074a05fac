"""
Timing for awaitables.

TimedFuture wraps anything awaitable (coroutine, Task, Future, custom
``__await__`` object) and can be awaited in its place. The wrapped
result or exception comes back unchanged; the wrapper only notes the
instant the inner computation settled.

Quick start:

    from easytiming import timing

    async def main():
        value = await timing(fetch(), "fetch")
"""

from __future__ import annotations

import time
from typing import Any, Awaitable, Generator, Generic, Optional, TypeVar

from easytiming.utils.exceptions import AwaitableError
from easytiming.utils.timing import Clock, Sink, Timer

T = TypeVar("T")


class TimedFuture(Timer, Generic[T]):
    """
    Timer bound to an in-flight awaitable.

    ``completed`` is set the first time the inner computation returns or
    raises. A settled wrapper reports start -> completed; one finalized
    before settling (cancelled, never awaited) reports start -> finalization.
    """

    def __init__(
        self,
        inner: Awaitable[T],
        name: str = "",
        *,
        sink: Optional[Sink] = None,
        quiet: bool = False,
        clock: Clock = time.perf_counter_ns,
    ) -> None:
        if not callable(getattr(inner, "__await__", None)):
            raise AwaitableError(
                "ET-FUT-0001", f"object {type(inner).__name__} can't be used in 'await' expression"
            )
        self._inner = inner
        self._completed: Optional[int] = None
        super().__init__(name, sink=sink, quiet=quiet, clock=clock)

    @classmethod
    def new(cls, inner: Awaitable[T], name: str, **kwargs: Any) -> "TimedFuture[T]":
        return cls(inner, name, **kwargs)

    @classmethod
    def quiet(cls, inner: Awaitable[T], **kwargs: Any) -> "TimedFuture[T]":
        return cls(inner, "", quiet=True, **kwargs)

    @classmethod
    def with_sink(cls, inner: Awaitable[T], name: str, sink: Sink, **kwargs: Any) -> "TimedFuture[T]":
        return cls(inner, name, sink=sink, **kwargs)

    @classmethod
    def with_writer(cls, inner: Awaitable[T], name: str, writer: Any, **kwargs: Any) -> "TimedFuture[T]":
        return cls(inner, name, sink=Sink.to_writer(writer), **kwargs)

    @classmethod
    def with_log(cls, inner: Awaitable[T], name: str, logger: Any = None, **kwargs: Any) -> "TimedFuture[T]":
        return cls(inner, name, sink=Sink.log(logger), **kwargs)

    @property
    def inner(self) -> Awaitable[T]:
        return self._inner

    @property
    def completed(self) -> Optional[int]:
        """Clock instant of settlement, or None while pending."""
        return self._completed

    @property
    def settled(self) -> bool:
        return self._completed is not None

    def _settle(self) -> None:
        if self._completed is None:
            self._completed = self._clock()

    def _end_instant(self) -> int:
        if self._completed is not None:
            return self._completed
        return self._clock()

    def __await__(self) -> Generator[Any, None, T]:
        # yield from forwards send() and throw(), so cancellation reaches the
        # inner computation untouched. CancelledError and GeneratorExit are
        # BaseException and do not count as settlement.
        try:
            result = yield from self._inner.__await__()
        except Exception:
            self._settle()
            raise
        self._settle()
        return result


class FutureExt:
    """Mixin giving an awaitable class a ``.timing(name)`` method."""

    def timing(self, name: str, **kwargs: Any) -> TimedFuture[Any]:
        return TimedFuture(self, name, **kwargs)  # type: ignore[arg-type]


def timing(inner: Awaitable[T], name: str, **kwargs: Any) -> TimedFuture[T]:
    """Wrap ``inner`` so that awaiting it is timed under ``name``."""
    return TimedFuture(inner, name, **kwargs)
