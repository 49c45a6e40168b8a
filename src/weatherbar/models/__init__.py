"""
Models package for weatherbar.
Contains the persisted cache record and the upstream payload view.
"""

from .cache_record import CacheRecord
from .current_condition import CurrentCondition

__all__ = ['CacheRecord', 'CurrentCondition']
