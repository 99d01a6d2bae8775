"""
Editorial callout validation, scheduling and time-window filtering
"""

from .parser import parse_callout, parse_point
from .scheduler import (
    EditorialCalloutScheduler, ScheduleResult, active_callouts,
    score_callout, is_setup_callout
)

__all__ = [
    'parse_callout', 'parse_point',
    'EditorialCalloutScheduler', 'ScheduleResult', 'active_callouts',
    'score_callout', 'is_setup_callout'
]
