"""Structured logging helpers."""

from .logging import LogManager, get_logger

__all__ = ["LogManager", "get_logger"]
