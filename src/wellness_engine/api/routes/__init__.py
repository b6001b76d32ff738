"""API route modules."""

from . import scores

__all__ = ["scores"]
