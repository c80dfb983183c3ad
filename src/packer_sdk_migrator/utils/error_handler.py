"""
Decorator-based error handling for MCP entry points.

Migrator errors raised inside a tool are turned into an error payload instead
of tearing down the MCP session.
"""

import functools
import json
import logging
from typing import Any, Callable, Dict, Union

from ..errors import MigratorError

logger = logging.getLogger(__name__)


def handle_mcp_errors(return_type: str = "str") -> Callable:
    """
    Decorator to handle exceptions in MCP entry points consistently.

    Args:
        return_type: The expected return type format
            - 'str': Returns error as string format "Error: {message}"
            - 'dict': Returns error as dict format {"error": "Operation failed: {message}"}
            - 'json': Returns error as JSON string with dict format

    Returns:
        Decorator function that wraps MCP entry points with error handling

    Example:
        @mcp.tool()
        @handle_mcp_errors(return_type='dict')
        def check_plugin(plugin: str) -> Dict[str, Any]:
            ...
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Union[str, Dict[str, Any]]:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                if not isinstance(e, MigratorError):
                    logger.exception(f"Unexpected error in {func.__name__}")
                error_message = str(e)

                if return_type == "dict":
                    return {"error": f"Operation failed: {error_message}"}
                elif return_type == "json":
                    return json.dumps({"error": f"Operation failed: {error_message}"})
                else:  # return_type == 'str' (default)
                    return f"Error: {error_message}"

        return wrapper

    return decorator


def handle_mcp_tool_errors(return_type: str = "str") -> Callable:
    """
    Specialized error handler for MCP tools with flexible return types.

    Args:
        return_type: The expected return type ('str', 'dict' or 'json')

    Returns:
        Decorator function for MCP tools
    """
    return handle_mcp_errors(return_type=return_type)
