"""
Response formatting utilities for the MCP server.

Turns check reports and migration results into plain dictionaries so MCP
tool responses have a uniform structure.
"""

from typing import Any, Dict, List, Tuple


class ResponseFormatter:
    """
    Helper class for formatting responses consistently across tools.

    This class provides static methods for formatting different types of
    responses in a consistent manner.
    """

    @staticmethod
    def messages(messages: List[Tuple[str, str]]) -> List[Dict[str, str]]:
        return [{"level": level, "message": text} for level, text in messages]

    @staticmethod
    def check_report(report) -> Dict[str, Any]:
        """
        Format a check report.

        Args:
            report: CheckReport produced by the check service

        Returns:
            Dictionary with the individual check results and the verdict
        """
        return {
            "plugin_path": report.plugin_path,
            "go_version": report.go_version,
            "go_version_satisfies_constraint": report.go_version_satisfied,
            "uses_go_modules": report.uses_go_modules,
            "packer_version": report.packer_version,
            "packer_version_satisfies_constraint": report.packer_version_satisfied,
            "removed_packages": list(report.removed_packages),
            "deprecated_identifiers": [
                {
                    "import_path": offence.rule.import_path,
                    "identifier": offence.rule.identifier,
                    "message": offence.rule.message,
                    "positions": [str(position) for position in offence.positions],
                }
                for offence in report.offences
            ],
            "blocking_problem": report.blocking_problem,
            "migratable": report.migratable,
            "all_constraints_satisfied": report.all_constraints_satisfied,
            "messages": ResponseFormatter.messages(report.messages),
        }

    @staticmethod
    def already_migrated(plugin_path: str, sdk_version: str) -> Dict[str, Any]:
        return {
            "plugin_path": plugin_path,
            "already_migrated": True,
            "sdk_version": sdk_version,
            "migratable": False,
        }

    @staticmethod
    def migration_result(result) -> Dict[str, Any]:
        """
        Format a migration result.

        Args:
            result: MigrationResult produced by the migration service

        Returns:
            Dictionary with the rewritten files and run messages
        """
        return {
            "plugin_path": result.plugin_path,
            "sdk_version": result.sdk_version,
            "dry_run": result.dry_run,
            "forced": result.forced,
            "files_scanned": result.files_scanned,
            "changed_files": result.changed_files,
            "ambiguous": {
                rewrite.filename: rewrite.ambiguous
                for rewrite in result.rewritten
                if rewrite.ambiguous
            },
            "vendors_dependencies": result.vendors_dependencies,
            "messages": ResponseFormatter.messages(result.messages),
        }
