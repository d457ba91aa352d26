"""Next-session load prescription from RPE-based 1RM estimates."""

__version__ = "0.1.0"
