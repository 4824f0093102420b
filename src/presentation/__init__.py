"""Presentation layer package."""

from presentation.cli import main
from presentation.handler import handler

__all__ = ["main", "handler"]
