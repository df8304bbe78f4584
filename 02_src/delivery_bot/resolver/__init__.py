"""Order status lookup."""

from .status_resolver import IStatusResolver, StatusResolver

__all__ = ["IStatusResolver", "StatusResolver"]
