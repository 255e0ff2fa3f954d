"""Shared device pool service."""

__version__ = "0.1.0"
