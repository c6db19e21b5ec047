"""Workout schedule resolution and session lifecycle engine."""

__version__ = "0.1.0"
