"""Helpers for testing code built on ChangeTracker."""

from .scheduler import ManualScheduler

__all__ = ["ManualScheduler"]
