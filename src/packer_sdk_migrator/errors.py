"""
Exception hierarchy for the Packer SDK migrator.

Every error raised by the migrator derives from MigratorError so the CLI and
the MCP tools can catch them at a single boundary.
"""

from typing import Optional


class MigratorError(Exception):
    """Base exception for migrator errors."""

    pass


class NotFoundError(MigratorError):
    """A file, module or plugin path could not be found."""

    pass


class GoSyntaxError(MigratorError):
    """A Go source file could not be parsed."""

    def __init__(self, filename: str, line: Optional[int] = None, column: Optional[int] = None):
        self.filename = filename
        self.line = line
        self.column = column
        location = filename
        if line is not None:
            location = f"{filename}:{line}:{column}"
        super().__init__(f"Go syntax error in {location}")


class AmbiguousSplitError(MigratorError):
    """A reference through a split package names an identifier no destination claims."""

    def __init__(self, filename: str, import_path: str, identifiers):
        self.filename = filename
        self.import_path = import_path
        self.identifiers = sorted(set(identifiers))
        super().__init__(
            f"{filename}: package {import_path} was split, but no destination "
            f"package is known for: {', '.join(self.identifiers)}"
        )


class SubprocessFailure(MigratorError):
    """An external command (go list, go mod tidy, ...) failed."""

    def __init__(self, command, message: str, stderr: str = ""):
        self.command = list(command)
        self.stderr = stderr
        super().__init__(f"{message}\n{stderr}" if stderr else message)


class AlreadyMigrated(MigratorError):
    """The plugin already depends on a new enough SDK version.

    This is a success sentinel: callers report it and exit zero.
    """

    def __init__(self, sdk_version: str):
        self.sdk_version = sdk_version
        super().__init__(f"plugin already migrated to SDK version {sdk_version}")


class MappingTableError(MigratorError):
    """The import path mapping tables are inconsistent."""

    pass


class GoModError(MigratorError):
    """go.mod is missing or could not be interpreted."""

    pass


class EligibilityCheckFailed(MigratorError):
    """The plugin failed the pre-migration checks and migration was not forced."""

    def __init__(self, result):
        self.result = result
        super().__init__(
            "plugin failed eligibility check for migration to the new SDK. "
            "Please see messages above."
        )
