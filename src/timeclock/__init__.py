"""Timeclock - personal work-time tracker with regular/overtime accounting."""

__version__ = "0.1.0"
