"""
ET error code registry for easytiming.

Each code maps to a short description used when no message is given.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class ErrorInfo:
    code: str
    description: str


# Core registry
_ET_REGISTRY: Dict[str, ErrorInfo] = {
    # Sinks
    "ET-SNK-0001": ErrorInfo("ET-SNK-0001", "Unsupported sink kind"),
    "ET-SNK-0002": ErrorInfo("ET-SNK-0002", "Writer sink destination has no write()"),
    "ET-SNK-0003": ErrorInfo("ET-SNK-0003", "Report could not be written to sink"),

    # Futures
    "ET-FUT-0001": ErrorInfo("ET-FUT-0001", "Wrapped object is not awaitable"),

    # Config
    "ET-CFG-0001": ErrorInfo("ET-CFG-0001", "Missing or invalid configuration file"),
}


def get_error_info(code: str) -> ErrorInfo:
    """Return ErrorInfo for a given ET code, or a generic one if not registered."""
    return _ET_REGISTRY.get(
        code,
        ErrorInfo(code=code, description="Unknown easytiming error code"),
    )
