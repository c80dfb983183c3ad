"""
Packer SDK Migrator MCP Server

This MCP server exposes the eligibility check and the migration of Packer
plugins to the plugin SDK as tools, so an assistant can check, preview
and migrate a plugin.
"""

import json
import logging
import os
import sys
from typing import Any, Dict, Optional

from mcp.server.fastmcp import FastMCP

from .analysis import registry
from .constants import DEFAULT_SDK_VERSION, PACKER_MODULE_PATH, SDK_MODULE_PATH
from .errors import AlreadyMigrated, EligibilityCheckFailed
from .mapping import OneToOne, Rename, Split, default_classifier
from .project_settings import ProjectSettings
from .services import CheckService, MigrationService
from .utils import ResponseFormatter, handle_mcp_errors, handle_mcp_tool_errors


def setup_server_logging():
    """Setup logging on stderr; stdout carries the stdio transport."""

    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(formatter)
    stderr_handler.setLevel(logging.INFO)

    root_logger.addHandler(stderr_handler)
    root_logger.setLevel(logging.INFO)


logger = logging.getLogger(__name__)

mcp = FastMCP("PackerSdkMigrator", dependencies=["tree-sitter", "tree-sitter-go", "packaging"])

# ----- RESOURCES -----


@mcp.resource("config://packer-sdk-migrator")
@handle_mcp_errors(return_type="json")
def get_config() -> str:
    """Get the module paths and import path tables the migrator works with."""
    tables = default_classifier().tables
    config = {
        "old_module": PACKER_MODULE_PATH,
        "new_module": SDK_MODULE_PATH,
        "default_sdk_version": DEFAULT_SDK_VERSION,
        "one_to_one": dict(tables.one_to_one),
        "rename": dict(tables.rename),
        "split": sorted(tables.split),
    }
    return json.dumps(config, indent=2)


# ----- TOOLS -----


@mcp.tool()
@handle_mcp_tool_errors(return_type="dict")
def check_plugin(path: str = "", deprecations_file: Optional[str] = None) -> Dict[str, Any]:
    """
    Check whether a Packer plugin can be migrated to the plugin SDK.

    Args:
        path: Plugin directory or module name; empty for the working directory
        deprecations_file: Optional JSON file with extra deprecated identifiers
    """
    settings = ProjectSettings.for_plugin(path.strip() or None, deprecations_file=deprecations_file)
    service = CheckService(rules=registry(settings.deprecations_file))
    try:
        report = service.check(settings.plugin_path, settings.repo_name)
    except AlreadyMigrated as e:
        return ResponseFormatter.already_migrated(settings.plugin_path, e.sdk_version)
    return ResponseFormatter.check_report(report)


@mcp.tool()
@handle_mcp_tool_errors(return_type="dict")
def migrate_plugin(
    path: str = "",
    sdk_version: str = DEFAULT_SDK_VERSION,
    force: bool = False,
    strict: bool = False,
    dry_run: bool = True,
    deprecations_file: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Migrate a Packer plugin to the plugin SDK.

    Runs as a dry run unless dry_run is set to False; files are overwritten
    in place without a backup.

    Args:
        path: Plugin directory or module name; empty for the working directory
        sdk_version: SDK version to require in go.mod
        force: Migrate even if the eligibility check fails
        strict: Fail on split package references that cannot be routed
        dry_run: Report the files that would change without writing them
        deprecations_file: Optional JSON file with extra deprecated identifiers
    """
    settings = ProjectSettings.for_plugin(
        path.strip() or None,
        sdk_version=sdk_version,
        force=force,
        strict=strict,
        dry_run=dry_run,
        deprecations_file=deprecations_file,
    )
    try:
        result = MigrationService().migrate(settings)
    except EligibilityCheckFailed as e:
        response = ResponseFormatter.migration_result(e.result)
        response["error"] = str(e)
        return response
    return ResponseFormatter.migration_result(result)


@mcp.tool()
@handle_mcp_tool_errors(return_type="dict")
def classify_import(import_path: str) -> Dict[str, Any]:
    """Show where a Packer core import path moved to in the plugin SDK."""
    disposition = default_classifier().classify(import_path.strip())
    response: Dict[str, Any] = {"import_path": import_path, "kind": disposition.kind}
    if isinstance(disposition, (OneToOne, Rename)):
        response["new_path"] = disposition.new_path
    if isinstance(disposition, Rename):
        response["new_alias"] = disposition.new_alias
    if isinstance(disposition, Split):
        response["new_paths"] = disposition.new_paths
    return response


def main():
    """Main function to run the MCP server."""
    setup_server_logging()
    transport_mode = os.getenv("MCP_TRANSPORT", "stdio")

    if transport_mode == "http":
        host = os.getenv("HOST", "127.0.0.1")
        port = int(os.getenv("PORT", 8080))
        mcp.settings.host = host
        mcp.settings.port = port
        logger.info(f"Starting MCP server in HTTP/SSE mode on {host}:{port}")
        mcp.run(transport="sse")
    else:
        logger.info("Starting MCP server in stdio mode")
        mcp.run()


if __name__ == "__main__":
    main()
