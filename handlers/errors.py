"""
handlers/errors.py
------------------
Error reporting middleware for command handlers.
Turns expected failures into a one-line message and exit code 1.
"""

import sqlite3
import sys
from functools import wraps
from typing import Callable

from utils.logger import get_logger

logger = get_logger(__name__)

EXPECTED_ERRORS = (ValueError, FileNotFoundError, KeyError, sqlite3.Error)


def reports_errors(func: Callable):
    """
    Decorator for handlers that return an exit code.

    Usage:
        @reports_errors
        def check_command(args):
            ...

    Behavior:
        - Expected errors print ``error: <message>`` to stderr and return 1.
        - Anything else propagates with its traceback.
    """
    @wraps(func)
    def wrapper(*args, **kwargs) -> int:
        try:
            return func(*args, **kwargs)
        except EXPECTED_ERRORS as e:
            message = e.args[0] if isinstance(e, KeyError) and e.args else e
            logger.info(f"{func.__name__} failed: {message}")
            print(f"error: {message}", file=sys.stderr)
            return 1

    return wrapper
