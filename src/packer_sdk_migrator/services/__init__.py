"""
Service layer for the Packer SDK migrator.

Services compose the lower layers (mapping, rewriting, analysis, toolchain)
into the check and migrate workflows used by the CLI and the MCP server.
"""

from .check_service import ERROR, INFO, OUTPUT, WARN, CheckReport, CheckService
from .migrate_service import MigrationResult, MigrationService

__all__ = [
    "CheckReport",
    "CheckService",
    "ERROR",
    "INFO",
    "MigrationResult",
    "MigrationService",
    "OUTPUT",
    "WARN",
]
