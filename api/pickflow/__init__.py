"""Pickflow: task tracking for cherry-picking commits onto feature branches."""

__version__ = "1.0.0"
