"""Adaptive pacing engine for sequential (RSVP-style) display of structured text."""

__version__ = "0.1.0"
