"""
Runtime data models passed between the protocol engine and the
tool execution layer.
"""

from .tool_result import ToolResult

__all__ = ["ToolResult"]
