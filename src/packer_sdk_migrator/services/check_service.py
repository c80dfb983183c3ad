"""
Eligibility Check Service - Decides whether a plugin can be migrated.

Runs the pre-migration checks in order: Go toolchain version, use of Go
modules, whether the plugin already depends on the SDK, the Packer core
version it depends on, and use of packages or identifiers the SDK dropped.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from ..analysis import (
    DeprecatedIdentifierScanner,
    DeprecationRule,
    Offence,
    PackageLister,
    build_import_graph,
    find_removed_packages,
    registry,
)
from ..constants import (
    CHECK_CSV_HEADER,
    GO_MOD_FILE,
    GO_VERSION_CONSTRAINT,
    PACKER_MODULE_PATH,
    PACKER_VERSION_CONSTRAINT,
    SDK_MODULE_PATH,
    SDK_VERSION_CONSTRAINT,
)
from ..errors import AlreadyMigrated, SubprocessFailure
from ..mapping import ImportPathClassifier
from ..parsing import GoSourceParser
from ..toolchain import GoModFile, GoToolchain, satisfies

logger = logging.getLogger(__name__)

# Message levels, in the order a terminal UI would colour them
OUTPUT = "output"
INFO = "info"
WARN = "warn"
ERROR = "error"


def _flag(value: bool) -> str:
    return "true" if value else "false"


@dataclass
class CheckReport:
    """Result of checking one plugin, plus the messages produced on the way."""

    plugin_path: str
    repo_name: str = ""
    go_version: str = ""
    go_version_satisfied: bool = False
    uses_go_modules: bool = False
    sdk_version: str = ""
    packer_version: str = ""
    packer_version_satisfied: bool = False
    removed_packages: List[str] = field(default_factory=list)
    offences: List[Offence] = field(default_factory=list)
    blocking_problem: Optional[str] = None
    messages: List[Tuple[str, str]] = field(default_factory=list)

    def add_message(self, level: str, text: str) -> None:
        self.messages.append((level, text))

    @property
    def uses_removed_packages_or_identifiers(self) -> bool:
        return bool(self.removed_packages or self.offences)

    @property
    def migratable(self) -> bool:
        """Every constraint except the Go toolchain version holds."""
        return (
            self.blocking_problem is None
            and self.uses_go_modules
            and self.packer_version_satisfied
            and not self.uses_removed_packages_or_identifiers
        )

    @property
    def all_constraints_satisfied(self) -> bool:
        return self.go_version_satisfied and self.migratable

    def to_csv(self) -> str:
        """Header line plus one record; the sdk_version column carries the Packer core version."""
        record = ",".join([
            self.go_version,
            _flag(self.go_version_satisfied),
            _flag(self.uses_go_modules),
            self.packer_version,
            _flag(self.packer_version_satisfied),
            _flag(not self.uses_removed_packages_or_identifiers),
            _flag(self.all_constraints_satisfied),
        ])
        return f"{CHECK_CSV_HEADER}\n{record}"


class CheckService:
    """
    Business service for the pre-migration eligibility check.

    Collaborators are injectable so the check can run without a Go toolchain.

    Args:
        toolchain: Provides the Go toolchain version
        lister: Package lister used to build the import graph
        rules: Deprecation rules (defaults to the process-wide registry)
        classifier: Import path classifier for removed package detection
        parser: Go source parser for the identifier scan
    """

    def __init__(
        self,
        toolchain: Optional[GoToolchain] = None,
        lister: Optional[PackageLister] = None,
        rules: Optional[Iterable[DeprecationRule]] = None,
        classifier: Optional[ImportPathClassifier] = None,
        parser: Optional[GoSourceParser] = None,
    ):
        self.toolchain = toolchain or GoToolchain()
        self.lister = lister
        self.rules = tuple(rules) if rules is not None else registry()
        self.classifier = classifier
        self.parser = parser or GoSourceParser()

    def check(self, plugin_path: str, repo_name: str = "") -> CheckReport:
        """
        Check whether the plugin at plugin_path can be migrated.

        A problem that makes later checks meaningless stops the check early;
        it is recorded as the report's blocking_problem.

        Args:
            plugin_path: Plugin module root
            repo_name: Name the plugin was given by, for messages

        Returns:
            CheckReport with every check that ran

        Raises:
            AlreadyMigrated: If the plugin already requires a new enough SDK
            GoModError: If go.mod exists but cannot be interpreted
            SubprocessFailure: If listing the plugin's packages fails
            GoSyntaxError: If a scanned file cannot be parsed
        """
        report = CheckReport(plugin_path=plugin_path, repo_name=repo_name)

        self._check_go_version(report)

        report.add_message(OUTPUT, "Checking whether plugin uses Go modules...")
        report.uses_go_modules = (Path(plugin_path) / GO_MOD_FILE).is_file()
        if not report.uses_go_modules:
            logger.warning(f"'{GO_MOD_FILE}' file not found - plugin {plugin_path} is not using Go modules")
            report.add_message(WARN, "Go modules not in use. plugin must use Go modules.")
            return self._block(report, f"Error getting SDK version for plugin {plugin_path}: {GO_MOD_FILE} not found")
        report.add_message(INFO, "Go modules in use: OK.")

        gomod = GoModFile.load(plugin_path)
        if not report.repo_name:
            report.repo_name = gomod.module_path or ""

        report.add_message(
            OUTPUT, f"Checking version of {SDK_MODULE_PATH} to determine if plugin was already migrated..."
        )
        report.sdk_version = gomod.version_of(SDK_MODULE_PATH) or ""
        if report.sdk_version:
            if satisfies(report.sdk_version, SDK_VERSION_CONSTRAINT):
                raise AlreadyMigrated(report.sdk_version)
            return self._block(
                report,
                f"plugin already migrated, but SDK version {report.sdk_version} "
                f"does not satisfy constraint {SDK_VERSION_CONSTRAINT}.",
            )

        report.add_message(OUTPUT, f"Checking version of {PACKER_MODULE_PATH} used in plugin...")
        report.packer_version = gomod.version_of(PACKER_MODULE_PATH) or ""
        if not report.packer_version:
            return self._block(
                report,
                f"This directory ({plugin_path}) doesn't seem to be a Packer plugin.\n"
                f"plugins depend on {PACKER_MODULE_PATH}",
            )
        report.packer_version_satisfied = satisfies(report.packer_version, PACKER_VERSION_CONSTRAINT)
        if report.packer_version_satisfied:
            report.add_message(INFO, f"Packer version {report.packer_version}: OK.")
        else:
            report.add_message(
                WARN,
                f"Packer version does not satisfy constraint {PACKER_VERSION_CONSTRAINT}. "
                f"Found Packer version: {report.packer_version}",
            )

        self._check_removed_usage(report)
        self._add_verdict(report)
        return report

    def _check_go_version(self, report: CheckReport) -> None:
        report.add_message(OUTPUT, "Checking Go runtime version ...")
        try:
            report.go_version = self.toolchain.version()
        except SubprocessFailure as e:
            logger.warning(f"Could not determine Go version: {e}")
            report.go_version = ""

        report.go_version_satisfied = satisfies(report.go_version, GO_VERSION_CONSTRAINT)
        if report.go_version_satisfied:
            report.add_message(INFO, f"Go version {report.go_version}: OK.")
        else:
            report.add_message(
                WARN,
                f"Go version does not satisfy constraint {GO_VERSION_CONSTRAINT}. "
                f"Found Go version: {report.go_version}.",
            )

    def _check_removed_usage(self, report: CheckReport) -> None:
        report.add_message(OUTPUT, "Checking whether plugin uses deprecated SDK packages or identifiers...")
        graph = build_import_graph(report.plugin_path, self.lister)
        report.removed_packages = find_removed_packages(graph, self.classifier)
        report.offences = DeprecatedIdentifierScanner(self.rules, self.parser).scan(graph)

        if not report.uses_removed_packages_or_identifiers:
            report.add_message(INFO, "No imports of deprecated SDK packages or identifiers: OK.")
            return

        if report.removed_packages:
            report.add_message(WARN, "Deprecated SDK packages in use:")
            for path in report.removed_packages:
                report.add_message(WARN, f" * {path}")

        if report.offences:
            report.add_message(WARN, "Deprecated SDK identifiers in use:")
            for offence in report.offences:
                report.add_message(WARN, f" * {offence.rule.identifier} ({offence.rule.import_path})")
                for position in offence.positions:
                    report.add_message(WARN, f"   * {position}")

    def _add_verdict(self, report: CheckReport) -> None:
        name = f" {report.repo_name}" if report.repo_name else ""
        if report.all_constraints_satisfied:
            report.add_message(INFO, f"All constraints satisfied. plugin{name} can be migrated to the new SDK.")
        elif report.migratable:
            report.add_message(
                INFO,
                f"plugin{name} can be migrated to the new SDK, but Go version "
                f"{GO_VERSION_CONSTRAINT} is recommended.",
            )
        else:
            report.add_message(
                ERROR, "Some constraints not satisfied. Please resolve these before migrating to the new SDK."
            )

    @staticmethod
    def _block(report: CheckReport, problem: str) -> CheckReport:
        logger.debug(f"Check stopped early: {problem}")
        report.blocking_problem = problem
        report.add_message(ERROR, problem)
        return report
