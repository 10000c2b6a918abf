"""
Monitoring module for graph stores.

This module provides logging configuration and structured, timed
operation logging.
"""

from .structured_logger import (
    StructuredLogger,
    OperationLogger,
    JSONFormatter,
    configure_logging,
    get_logger,
)

__all__ = [
    "StructuredLogger",
    "OperationLogger",
    "JSONFormatter",
    "configure_logging",
    "get_logger",
]
