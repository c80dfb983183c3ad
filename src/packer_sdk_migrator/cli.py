"""
Command line interface.

Usage:
    packer-sdk-migrator check [--csv] [PATH]
    packer-sdk-migrator migrate [--sdk-version SDK_VERSION] [--force] [--strict] [--dry-run] [PATH]

PATH is resolved against the current directory, then $GOPATH/src, then the
directories in PACKER_SDK_MIGRATOR_SEARCH_PATH. Without PATH the current
working directory is assumed to hold a Packer plugin.

Examples:
    # Is the plugin ready to be migrated?
    packer-sdk-migrator check github.com/my-org/packer-plugin-foo

    # Migrate, ignoring failed checks
    packer-sdk-migrator migrate --force --sdk-version v0.0.12
"""

import argparse
import logging
import sys
from typing import List, Optional, Tuple

from . import __version__
from .analysis import registry
from .constants import DEFAULT_SDK_VERSION
from .errors import AlreadyMigrated, EligibilityCheckFailed, MigratorError, NotFoundError
from .project_settings import ProjectSettings
from .services import ERROR, WARN, CheckService, MigrationService

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Send log records to stderr so stdout only carries command output."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(formatter)
    root_logger.addHandler(stderr_handler)
    root_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def print_messages(messages: List[Tuple[str, str]]) -> None:
    for level, text in messages:
        stream = sys.stderr if level in (WARN, ERROR) else sys.stdout
        print(text, file=stream)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="packer-sdk-migrator",
        description="Migrate Packer plugins from Packer core to the Packer plugin SDK",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--deprecations",
        type=str,
        default=None,
        help="JSON file with extra deprecated identifiers (overrides PACKER_SDK_MIGRATOR_DEPRECATIONS)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser(
        "check",
        help="Check whether a Packer plugin is ready to be migrated to the SDK",
    )
    check.add_argument("--csv", action="store_true", help="CSV output")
    check.add_argument("path", nargs="?", default=None, help="Plugin module path")

    migrate = subparsers.add_parser(
        "migrate",
        help="Migrate a Packer plugin to the SDK",
    )
    migrate.add_argument(
        "--sdk-version",
        type=str,
        default=DEFAULT_SDK_VERSION,
        help=f"SDK version to require (default: {DEFAULT_SDK_VERSION})",
    )
    migrate.add_argument(
        "--force",
        action="store_true",
        help="Ignore failing checks and force migration",
    )
    migrate.add_argument(
        "--strict",
        action="store_true",
        help="Fail on references through split packages that cannot be routed",
    )
    migrate.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would change without writing anything",
    )
    migrate.add_argument("path", nargs="?", default=None, help="Plugin module path")

    return parser


def _resolve_settings(args: argparse.Namespace, **options) -> Optional[ProjectSettings]:
    try:
        return ProjectSettings.for_plugin(args.path, deprecations_file=args.deprecations, **options)
    except NotFoundError as e:
        print(f"Error finding plugin {args.path}: {e}", file=sys.stderr)
        return None


def run_check(args: argparse.Namespace, check_service: Optional[CheckService] = None) -> int:
    settings = _resolve_settings(args)
    if settings is None:
        return 1
    check_service = check_service or CheckService(rules=registry(settings.deprecations_file))

    try:
        report = check_service.check(settings.plugin_path, settings.repo_name)
    except AlreadyMigrated as e:
        print(str(e))
        return 0

    if args.csv:
        print(report.to_csv())
    else:
        print_messages(report.messages)
    return 0 if report.migratable else 1


def run_migrate(args: argparse.Namespace, migration_service: Optional[MigrationService] = None) -> int:
    settings = _resolve_settings(
        args,
        sdk_version=args.sdk_version,
        force=args.force,
        strict=args.strict,
        dry_run=args.dry_run,
    )
    if settings is None:
        return 1
    migration_service = migration_service or MigrationService()

    try:
        result = migration_service.migrate(settings)
    except EligibilityCheckFailed as e:
        print_messages(e.result.messages)
        raise

    print_messages(result.messages)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point of the packer-sdk-migrator command."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    logger.debug(f"Running {args.command} with {vars(args)}")
    try:
        if args.command == "check":
            return run_check(args)
        return run_migrate(args)
    except MigratorError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
