"""Schedules NHL game-tracking tasks on Cloud Tasks."""

__version__ = "0.1.0"
