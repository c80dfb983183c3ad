"""Tests for MCP error handling decorators."""
from pathlib import Path as _TestPath
import json
import sys

ROOT = _TestPath(__file__).resolve().parents[2]
SRC_PATH = ROOT / 'src'
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from packer_sdk_migrator.errors import NotFoundError
from packer_sdk_migrator.utils import handle_mcp_errors, handle_mcp_tool_errors


def test_passes_results_through():
    @handle_mcp_tool_errors(return_type='dict')
    def tool(value):
        return {"value": value}

    assert tool(3) == {"value": 3}
    assert tool.__name__ == "tool"


def test_error_formats():
    def failing():
        raise NotFoundError("no such plugin")

    assert handle_mcp_errors()(failing)() == "Error: no such plugin"
    assert handle_mcp_errors('dict')(failing)() == {"error": "Operation failed: no such plugin"}
    assert json.loads(handle_mcp_errors('json')(failing)()) == {"error": "Operation failed: no such plugin"}


def test_unexpected_errors_are_logged(caplog):
    @handle_mcp_errors('dict')
    def broken():
        raise KeyError("boom")

    assert broken() == {"error": "Operation failed: 'boom'"}
    assert "Unexpected error in broken" in caplog.text
