"""Flatten a GitHub repository archive into a single text document."""

__version__ = "0.1.0"
