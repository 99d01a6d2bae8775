"""
Identity tracking for annotations without stable ids
"""

from .arrow_identity import ArrowIdentityAssigner

__all__ = ['ArrowIdentityAssigner']
