"""Mini README: Core package initializer for the household ledger.

Exposes convenience imports so callers can reach the logging helper without
knowing the module layout. Keep this file light: importing the package must
not pull in the web framework.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
