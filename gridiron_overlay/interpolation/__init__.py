"""
Frame interpolation
"""

from .interpolator import FrameInterpolator, find_bracketing_frames, interpolate, lerp

__all__ = ['FrameInterpolator', 'find_bracketing_frames', 'interpolate', 'lerp']
