"""
Structured logging utilities for easytiming.

Timers reporting through a log sink, and the package's own diagnostics,
go through these helpers so records carry the same fields.

Log fields always present on records from get_logger():
- timer (timer name)
- lapse_ns (total elapsed nanoseconds)
- duration_ms (elapsed milliseconds)
- sink (sink kind that produced the record)
"""

from __future__ import annotations

import logging
import logging.config
import logging.handlers
from pathlib import Path
from typing import Any, Dict, Optional

from easytiming.config import settings

# Below DEBUG; timing reports are opt-in noise.
TRACE = 5
logging.addLevelName(TRACE, "TRACE")

_LOGGER_INITIALIZED = False
_FILE_HANDLER: Optional[logging.Handler] = None

REPORT_FIELDS = ("timer", "lapse_ns", "duration_ms", "sink")


# -----------------------------------------------------------------------------
# 1. LOAD LOGGING.YAML
# -----------------------------------------------------------------------------
def _load_logging_yaml() -> None:
    global _LOGGER_INITIALIZED
    if _LOGGER_INITIALIZED:
        return

    cfg_path = Path(settings.LOGGING_YAML)
    if cfg_path.exists():
        config = settings.load_yaml(str(cfg_path))
        # Incremental: only levels and propagation change; handlers owned by
        # the host application are never cleared.
        config["incremental"] = True
        logging.config.dictConfig(config)

    package_logger = logging.getLogger("easytiming")
    if not any(isinstance(h, logging.NullHandler) for h in package_logger.handlers):
        package_logger.addHandler(logging.NullHandler())

    _LOGGER_INITIALIZED = True


# -----------------------------------------------------------------------------
# 2. OPTIONAL FILE HANDLER
# -----------------------------------------------------------------------------
def _get_file_handler() -> Optional[logging.Handler]:
    """
    Rotating JSON-line handler under LOG_DIR, shared by every logger.
    Returns None when LOG_DIR is not configured.
    """
    global _FILE_HANDLER

    if not settings.LOG_DIR:
        return None
    if _FILE_HANDLER is not None:
        return _FILE_HANDLER

    log_dir = Path(settings.LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        filename=str(log_dir / "timing.log"),
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            '{"ts": "%(asctime)s", "level": "%(levelname)s", '
            '"logger": "%(name)s", "message": "%(message)s", '
            '"timer": "%(timer)s", "lapse_ns": "%(lapse_ns)s", '
            '"duration_ms": "%(duration_ms)s", "sink": "%(sink)s"}'
        )
    )
    handler.setLevel(TRACE)

    _FILE_HANDLER = handler
    return handler


# -----------------------------------------------------------------------------
# 3. CONTEXT FILTER
# -----------------------------------------------------------------------------
class TimingContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        for a in REPORT_FIELDS:
            if not hasattr(record, a):
                setattr(record, a, None)
        return True


# -----------------------------------------------------------------------------
# 4. GET LOGGER
# -----------------------------------------------------------------------------
def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger carrying the timing context fields.

    Parameters
    ----------
    name : str, optional
        Logger name; defaults to settings.LOGGER_NAME.

    Returns
    -------
    logging.Logger
        Logger with the context filter, the optional file handler and a
        level taken from settings when none was set.
    """
    _load_logging_yaml()
    logger = logging.getLogger(name or settings.LOGGER_NAME)

    if not any(isinstance(f, TimingContextFilter) for f in logger.filters):
        logger.addFilter(TimingContextFilter())

    file_handler = _get_file_handler()
    if file_handler is not None and file_handler not in logger.handlers:
        logger.addHandler(file_handler)

    if logger.level == logging.NOTSET:
        logger.setLevel(settings.LOG_LEVEL.upper())

    return logger


# -----------------------------------------------------------------------------
# 5. bind_report(): structured extras for a finished timing
# -----------------------------------------------------------------------------
def bind_report(
    name: str,
    lapse_ns: int,
    sink: str,
    extra: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    base = {
        "timer": name,
        "lapse_ns": lapse_ns,
        "duration_ms": lapse_ns / 1_000_000,
        "sink": sink,
    }
    if extra:
        base.update(extra)
    return base
