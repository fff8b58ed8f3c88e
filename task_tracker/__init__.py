"""Task tracking REST API backed by a pooled relational store."""

__version__ = "1.0.0"
