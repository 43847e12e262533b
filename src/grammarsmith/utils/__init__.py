"""Utility modules for Grammarsmith.

Provides:
- logger: get_logger for logging
"""

from grammarsmith.utils.logger import get_logger

__all__ = ["get_logger"]
