"""
Shared utilities for the API relay
"""

from .logger import setup_logging
from .query_params import string_query_params

__all__ = [
    "setup_logging",
    "string_query_params",
]
