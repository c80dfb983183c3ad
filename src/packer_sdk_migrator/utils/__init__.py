"""
Utility modules for the migrator.

- error_handler: Decorator-based error handling for MCP entry points
- file_filter: Which directories and files the migrate walk visits
- response_formatter: MCP response dictionaries for check reports and migration results
"""

from .error_handler import handle_mcp_errors, handle_mcp_tool_errors
from .file_filter import FileFilter
from .response_formatter import ResponseFormatter

__all__ = [
    "handle_mcp_errors",
    "handle_mcp_tool_errors",
    "FileFilter",
    "ResponseFormatter",
]
