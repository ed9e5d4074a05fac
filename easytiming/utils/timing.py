"""
Scoped timers.

A Timer captures a monotonic start instant when it is built and reports
how long it lived when it is finalized: on leaving a ``with`` block, on
``close()``, or when the object is garbage collected. Whichever comes
first wins; the report is written once.

Usage:

    from easytiming import Timer

    def do_something():
        with Timer.new("do_something() function"):
            ...
"""

from __future__ import annotations

import io
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from easytiming.config import settings
from easytiming.logging.logger import TRACE, bind_report, get_logger
from easytiming.utils.exceptions import SinkError

NANOS_PER_SEC = 1_000_000_000
NANOS_PER_MILLI = 1_000_000
NANOS_PER_MICRO = 1_000

Clock = Callable[[], int]


# -----------------------------------------------------------------------------
# Duration
# -----------------------------------------------------------------------------
def format_duration(nanos: int) -> str:
    """Render nanoseconds as e.g. ``532ns``, ``12.5µs``, ``1.234567ms``, ``2.000001s``."""
    if nanos >= NANOS_PER_SEC:
        scale, unit = NANOS_PER_SEC, "s"
    elif nanos >= NANOS_PER_MILLI:
        scale, unit = NANOS_PER_MILLI, "ms"
    elif nanos >= NANOS_PER_MICRO:
        scale, unit = NANOS_PER_MICRO, "µs"
    else:
        return f"{nanos}ns"

    whole, frac = divmod(nanos, scale)
    if not frac:
        return f"{whole}{unit}"
    digits = str(frac).rjust(len(str(scale)) - 1, "0").rstrip("0")
    return f"{whole}.{digits}{unit}"


@dataclass(frozen=True, order=True)
class Duration:
    nanos: int = 0

    @property
    def secs(self) -> int:
        return self.nanos // NANOS_PER_SEC

    @property
    def subsec_nanos(self) -> int:
        """Nanoseconds past the last whole second (0..999_999_999)."""
        return self.nanos % NANOS_PER_SEC

    def total_seconds(self) -> float:
        return self.nanos / NANOS_PER_SEC

    def __str__(self) -> str:
        return format_duration(self.nanos)


# -----------------------------------------------------------------------------
# Sinks
# -----------------------------------------------------------------------------
class SinkKind(str, Enum):
    CONSOLE = "console"
    WRITER = "writer"
    LOG = "log"


@dataclass(frozen=True, eq=False)
class Sink:
    """Where a finished timer writes its report. One per timer, fixed at construction."""

    kind: SinkKind
    writer: Optional[Any] = None
    logger: Optional[logging.Logger] = None
    terminator: str = ""

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "kind", SinkKind(self.kind))
        except ValueError:
            raise SinkError("ET-SNK-0001", f"Unsupported sink kind: {self.kind!r}") from None

        if self.kind is SinkKind.WRITER and not (
            isinstance(self.writer, bytearray) or callable(getattr(self.writer, "write", None))
        ):
            raise SinkError(
                "ET-SNK-0002",
                f"{type(self.writer).__name__} object has no write() method",
            )
        if self.kind is SinkKind.LOG and self.logger is None:
            object.__setattr__(self, "logger", get_logger())

    @classmethod
    def console(cls) -> "Sink":
        return cls(SinkKind.CONSOLE)

    @classmethod
    def to_writer(cls, writer: Any, terminator: Optional[str] = None) -> "Sink":
        """
        Report into ``writer``.

        Text streams (``io.TextIOBase``) receive ``str``; a ``bytearray`` is
        extended in place; anything else receives UTF-8 ``bytes``.
        """
        if terminator is None:
            terminator = settings.WRITER_TERMINATOR
        return cls(SinkKind.WRITER, writer=writer, terminator=terminator)

    @classmethod
    def log(cls, logger: Optional[logging.Logger] = None) -> "Sink":
        return cls(SinkKind.LOG, logger=logger)

    @classmethod
    def default(cls) -> "Sink":
        if settings.DEFAULT_SINK == SinkKind.LOG.value:
            return cls.log()
        return cls.console()


def _write_to(writer: Any, text: str) -> None:
    if isinstance(writer, io.TextIOBase):
        writer.write(text)
    elif isinstance(writer, bytearray):
        writer.extend(text.encode("utf-8"))
    else:
        writer.write(text.encode("utf-8"))


# -----------------------------------------------------------------------------
# Timer
# -----------------------------------------------------------------------------
class Timer:
    """
    Measures the lifetime of a scope and reports it once.

    Parameters
    ----------
    name : str
        Label used in the report.
    sink : Sink, optional
        Report destination; ``Sink.default()`` when omitted.
    quiet : bool
        Measure but never report.
    clock : callable, optional
        Monotonic nanosecond clock; ``time.perf_counter_ns`` by default.
    """

    def __init__(
        self,
        name: str = "",
        *,
        sink: Optional[Sink] = None,
        quiet: bool = False,
        clock: Clock = time.perf_counter_ns,
    ) -> None:
        self._name = str(name)
        self._quiet = bool(quiet)
        self._sink = sink if sink is not None else Sink.default()
        self._clock = clock
        self._lapse = Duration()
        self._finished = False
        self._start = clock()

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------
    @classmethod
    def new(cls, name: str, **kwargs: Any) -> "Timer":
        return cls(name, **kwargs)

    @classmethod
    def quiet(cls, **kwargs: Any) -> "Timer":
        """
        Nameless timer that never reports.

        This builds a new Timer; on an existing timer read ``is_quiet`` instead.
        """
        return cls("", quiet=True, **kwargs)

    @classmethod
    def with_sink(cls, name: str, sink: Sink, **kwargs: Any) -> "Timer":
        return cls(name, sink=sink, **kwargs)

    @classmethod
    def with_writer(cls, name: str, writer: Any, **kwargs: Any) -> "Timer":
        return cls(name, sink=Sink.to_writer(writer), **kwargs)

    @classmethod
    def with_log(cls, name: str, logger: Optional[logging.Logger] = None, **kwargs: Any) -> "Timer":
        return cls(name, sink=Sink.log(logger), **kwargs)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def name(self) -> str:
        return self._name

    @property
    def start(self) -> int:
        return self._start

    @property
    def sink(self) -> Sink:
        return self._sink

    @property
    def is_quiet(self) -> bool:
        return self._quiet

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def lapse(self) -> Duration:
        """Duration recorded at finalization; zero before that."""
        return self._lapse

    def elapsed(self) -> Duration:
        return Duration(self._clock() - self._start)

    # ------------------------------------------------------------------
    # Finalization
    # ------------------------------------------------------------------
    def _end_instant(self) -> int:
        return self._clock()

    def close(self) -> Duration:
        """Finalize now. Later calls, scope exits and collection are no-ops."""
        if self._finished:
            return self._lapse
        self._finished = True
        self._lapse = Duration(self._end_instant() - self._start)
        if not self._quiet:
            self._report()
        return self._lapse

    def _report(self) -> None:
        line = f'"{self._name}" was running for {self._lapse.subsec_nanos} ns'
        kind = self._sink.kind

        try:
            if kind is SinkKind.CONSOLE:
                print(line)
            elif kind is SinkKind.WRITER:
                _write_to(self._sink.writer, line + self._sink.terminator)
            elif kind is SinkKind.LOG:
                self._sink.logger.log(
                    TRACE, line, extra=bind_report(self._name, self._lapse.nanos, kind.value)
                )
        except Exception as e:  # noqa: BLE001
            get_logger("easytiming.report").debug(
                "report_write_failed",
                extra=bind_report(
                    self._name,
                    self._lapse.nanos,
                    kind.value,
                    {"et_code": "ET-SNK-0003", "error": repr(e)},
                ),
            )

    def __enter__(self) -> "Timer":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __del__(self) -> None:
        # Construction may have failed before the timer existed.
        if getattr(self, "_finished", True):
            return
        self.close()

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------
    def __str__(self) -> str:
        return f"Timing({self._name}) is running for {self.elapsed()}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self._name!r}, start={self._start}, "
            f"lapse={self._lapse!r}, quiet={self._quiet}, sink={self._sink.kind.value!r})"
        )
