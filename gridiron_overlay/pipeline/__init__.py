"""
Playback orchestration
"""

from .playback import PlaybackSession, OverlayDecision

__all__ = ['PlaybackSession', 'OverlayDecision']
