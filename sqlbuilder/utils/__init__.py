"""Utility helpers for sqlbuilder."""

from sqlbuilder.utils.logging import configure_logging, get_logger

__all__ = ("configure_logging", "get_logger")
