import logging
import logging.handlers

from easytiming import TRACE, Timer, get_logger
from easytiming.config import settings
from easytiming.logging import logger as logger_mod
from easytiming.logging.logger import TimingContextFilter, bind_report


def test_trace_level_registered():
    assert TRACE < logging.DEBUG
    assert logging.getLevelName(TRACE) == "TRACE"


def test_get_logger_defaults():
    logger = get_logger()
    assert logger.name == settings.LOGGER_NAME
    assert logger.level != logging.NOTSET
    assert any(isinstance(f, TimingContextFilter) for f in logger.filters)


def test_filter_fills_missing_fields(caplog):
    logger = get_logger("easytiming.tests.fields")
    with caplog.at_level(logging.INFO, logger=logger.name):
        logger.info("plain")
    record = caplog.records[-1]
    assert record.timer is None
    assert record.lapse_ns is None
    assert record.duration_ms is None
    assert record.sink is None


def test_bind_report():
    extra = bind_report("job", 2_500_000, "log", {"et_code": "ET-SNK-0003"})
    assert extra == {
        "timer": "job",
        "lapse_ns": 2_500_000,
        "duration_ms": 2.5,
        "sink": "log",
        "et_code": "ET-SNK-0003",
    }


def test_file_handler_when_log_dir_set(monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "LOG_DIR", str(tmp_path))
    monkeypatch.setattr(logger_mod, "_FILE_HANDLER", None)
    logger = get_logger("easytiming.tests.file")
    handler = logger_mod._FILE_HANDLER
    try:
        assert isinstance(handler, logging.handlers.RotatingFileHandler)
        assert handler in logger.handlers
        logger.warning("to file", extra=bind_report("disk", 10, "log"))
        handler.flush()
        text = (tmp_path / "timing.log").read_text(encoding="utf-8")
        assert '"timer": "disk"' in text
        assert '"message": "to file"' in text
    finally:
        logger.removeHandler(handler)
        handler.close()


def test_host_handlers_survive_logging_setup(monkeypatch, tmp_path):
    path = tmp_path / "host.log"
    host = logging.getLogger("tests.host.app")
    handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    host.addHandler(handler)
    host.setLevel(logging.INFO)
    monkeypatch.setattr(logger_mod, "_LOGGER_INITIALIZED", False)
    try:
        host.info("before")
        Timer.with_log("t").close()
        host.info("after")
        handler.flush()
        assert path.read_text(encoding="utf-8").splitlines() == ["before", "after"]
        assert handler in host.handlers
    finally:
        host.removeHandler(handler)
        handler.close()


def test_package_logger_gets_single_null_handler(monkeypatch):
    monkeypatch.setattr(logger_mod, "_LOGGER_INITIALIZED", False)
    get_logger()
    monkeypatch.setattr(logger_mod, "_LOGGER_INITIALIZED", False)
    get_logger()
    package_logger = logging.getLogger("easytiming")
    assert sum(isinstance(h, logging.NullHandler) for h in package_logger.handlers) == 1
