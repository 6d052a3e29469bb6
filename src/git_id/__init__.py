"""Per-session git identity switcher."""

__version__ = "0.1.0"
