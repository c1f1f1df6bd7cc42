"""Lumina study timer: Pomodoro, reverse Pomodoro, custom and stopwatch sessions."""

__version__ = "0.1.0"
