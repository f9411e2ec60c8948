"""Ambient helpers: logging, value loading and template output."""

from .logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
