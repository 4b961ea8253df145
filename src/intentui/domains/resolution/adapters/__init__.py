"""Resolution domain adapters."""
from .mcp_tool import ResolutionToolAdapter, apply_overrides

__all__ = ["ResolutionToolAdapter", "apply_overrides"]
