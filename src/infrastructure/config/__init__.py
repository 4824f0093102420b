"""Configuration package."""

from infrastructure.config.loader import ConfigLoader, RuntimeConfig

__all__ = ["ConfigLoader", "RuntimeConfig"]
