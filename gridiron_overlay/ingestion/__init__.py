"""
Play document ingestion
"""

from .parser import PlayParser, parse_play, load_play, normalize_frame, is_valid_hex

__all__ = ['PlayParser', 'parse_play', 'load_play', 'normalize_frame', 'is_valid_hex']
