"""Pomocycle: a Pomodoro work/break timer with lifetime stats."""

__version__ = "0.1.0"
