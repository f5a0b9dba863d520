"""Todo items with per-user permissions, their rules, and SQL storage."""

__version__ = "0.1.0"