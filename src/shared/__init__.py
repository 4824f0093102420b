"""Shared utilities package."""

from shared.logging import setup_logger, get_logger, set_level, LoggerAdapter
from shared.metrics import MetricsCollector
from shared.types import PathLike

__all__ = [
    "setup_logger",
    "get_logger",
    "set_level",
    "LoggerAdapter",
    "MetricsCollector",
    "PathLike",
]
