"""minitodo - a minimal terminal todo list."""

__version__ = "0.1.0"
