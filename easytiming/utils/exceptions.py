"""
Exception hierarchy for easytiming.

Everything raised by the package is a TimingError (or subclass) with an ET code.
Nothing here is raised from finalization.
"""

from __future__ import annotations

from typing import Optional

from easytiming.utils.error_codes import get_error_info, ErrorInfo


class TimingError(Exception):
    """Base exception for all easytiming errors."""

    def __init__(
        self,
        code: str,
        message: Optional[str] = None,
    ) -> None:
        self.info: ErrorInfo = get_error_info(code)
        self.code: str = self.info.code
        self.detail: str = message or self.info.description
        super().__init__(f"{self.code}: {self.detail}")


class SinkError(TimingError):
    """Invalid sink selection or destination."""


class AwaitableError(TimingError, TypeError):
    """Object handed to the future wrapper cannot be awaited."""


class ConfigError(TimingError):
    """Configuration file errors."""
