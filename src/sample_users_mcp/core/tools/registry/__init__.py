from .base import ToolRegistry, ToolListing

__all__ = ["ToolRegistry", "ToolListing"]
