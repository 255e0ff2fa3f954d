"""Domain modules and their public exports."""

from . import accounts, checkout, common, devices, feedback

__all__ = [
    "accounts",
    "checkout",
    "common",
    "devices",
    "feedback",
]
