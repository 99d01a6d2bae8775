"""
Utility functions
"""

from .json_utils import safe_json_convert, pretty_json, load_json
from .logging import setup_logging, get_logger
from .numeric import finite_or_default, optional_number, clamp, clamp01

__all__ = [
    'safe_json_convert', 'pretty_json', 'load_json',
    'setup_logging', 'get_logger',
    'finite_or_default', 'optional_number', 'clamp', 'clamp01'
]
