"""
Logging for fieldcheck.
"""

from .logger import configure_package_loggers, get_logger, log_operation, setup_logger

__all__ = [
    "configure_package_loggers",
    "get_logger",
    "log_operation",
    "setup_logger",
]
