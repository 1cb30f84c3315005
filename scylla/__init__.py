"""Scylla - terminal dashboard for browsing remote agent records."""

__version__ = "0.1.0"
