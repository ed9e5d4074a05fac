"""
Re-export the timing API for easier imports.

Usage:
    from easytiming import Timer, timing

    with Timer.new("rebuild index"):
        ...
"""

from .logging.logger import TRACE, get_logger
from .utils.decorators import timed
from .utils.exceptions import AwaitableError, ConfigError, SinkError, TimingError
from .utils.future import FutureExt, TimedFuture, timing
from .utils.timing import Duration, Sink, SinkKind, Timer, format_duration

__all__ = [
    "Timer",
    "TimedFuture",
    "Sink",
    "SinkKind",
    "Duration",
    "format_duration",
    "timing",
    "timed",
    "FutureExt",
    "TRACE",
    "get_logger",
    "TimingError",
    "SinkError",
    "AwaitableError",
    "ConfigError",
]
