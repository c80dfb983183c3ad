"""
Migration Service - Moves a plugin from Packer core onto the plugin SDK.

Workflow: run the eligibility check, rewrite go.mod, rewrite the imports of
every Go file outside vendored code, then run ``go mod tidy``.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from ..analysis import registry
from ..constants import PACKER_MODULE_PATH, SDK_MODULE_PATH, VENDOR_DIR
from ..errors import AlreadyMigrated, EligibilityCheckFailed
from ..project_settings import ProjectSettings
from ..rewriting import ImportRewriter, RewriteResult
from ..toolchain import DependencyTidier, GoToolchain, rewrite_go_mod
from ..utils import FileFilter
from .check_service import INFO, OUTPUT, WARN, CheckReport, CheckService

logger = logging.getLogger(__name__)


@dataclass
class MigrationResult:
    """Business result of one migrate run."""

    plugin_path: str
    repo_name: str = ""
    sdk_version: str = ""
    dry_run: bool = False
    check_report: Optional[CheckReport] = None
    forced: bool = False
    go_mod_content: str = ""
    rewritten: List[RewriteResult] = field(default_factory=list)
    files_scanned: int = 0
    vendors_dependencies: bool = False
    messages: List[Tuple[str, str]] = field(default_factory=list)

    def add_message(self, level: str, text: str) -> None:
        self.messages.append((level, text))

    @property
    def changed_files(self) -> List[str]:
        return [r.filename for r in self.rewritten]


class MigrationService:
    """
    Business service for migrating a plugin to the SDK.

    Args:
        check_service: Eligibility check (built from the run's settings if omitted)
        rewriter: Import rewriter (built from the run's settings if omitted)
        tidier: Runs ``go mod tidy`` after go.mod was rewritten
        file_filter: Decides which files the walk rewrites
    """

    def __init__(
        self,
        check_service: Optional[CheckService] = None,
        rewriter: Optional[ImportRewriter] = None,
        tidier: Optional[DependencyTidier] = None,
        file_filter: Optional[FileFilter] = None,
    ):
        self.check_service = check_service
        self.rewriter = rewriter
        self.tidier = tidier
        self.file_filter = file_filter or FileFilter()

    def migrate(self, settings: ProjectSettings) -> MigrationResult:
        """
        Migrate the plugin described by settings.

        Every file is rewritten in memory before anything is written, so a
        file that fails to parse leaves the plugin untouched.

        Args:
            settings: Plugin path and run options

        Returns:
            MigrationResult with the files that changed

        Raises:
            EligibilityCheckFailed: If the check fails and force is not set
            GoModError: If go.mod is missing or malformed
            GoSyntaxError: If a Go file cannot be parsed
            AmbiguousSplitError: In strict mode, for unroutable split references
            SubprocessFailure: If a go command fails
        """
        result = MigrationResult(
            plugin_path=settings.plugin_path,
            repo_name=settings.repo_name,
            sdk_version=settings.sdk_version,
            dry_run=settings.dry_run,
        )

        self._run_checks(settings, result)

        rewriter = self.rewriter or ImportRewriter(strict=settings.strict)
        rewrites = []
        for path in self.file_filter.iter_source_files(settings.plugin_path):
            result.files_scanned += 1
            rewrite = rewriter.rewrite_file(path, dry_run=True)
            if rewrite.changed:
                rewrites.append(rewrite)
        logger.info(f"{len(rewrites)} of {result.files_scanned} Go files need rewriting")

        result.add_message(OUTPUT, "Rewriting plugin go.mod file...")
        gomod = rewrite_go_mod(
            settings.plugin_path, settings.sdk_version,
            PACKER_MODULE_PATH, SDK_MODULE_PATH, dry_run=settings.dry_run,
        )
        result.go_mod_content = gomod.text()

        result.add_message(OUTPUT, "Rewriting SDK package imports...")
        for rewrite in rewrites:
            if not settings.dry_run:
                Path(rewrite.filename).write_bytes(rewrite.content)
                rewrite.written = True
                logger.info(f"Rewrote imports in {rewrite.filename}")
            result.rewritten.append(rewrite)
            for import_path, identifiers in rewrite.ambiguous.items():
                result.add_message(
                    WARN,
                    f"{rewrite.filename}: kept import of {import_path}, no SDK package is known for "
                    f"{', '.join(identifiers)}",
                )

        result.vendors_dependencies = (Path(settings.plugin_path) / VENDOR_DIR).is_dir()

        if settings.dry_run:
            result.add_message(INFO, f"Dry run: {len(rewrites)} files would be rewritten.")
            for rewrite in rewrites:
                result.add_message(INFO, f" * {rewrite.filename}")
            return result

        result.add_message(OUTPUT, "Running `go mod tidy`...")
        tidier = self.tidier or GoToolchain()
        tidier.mod_tidy(settings.plugin_path)

        result.add_message(
            INFO, f"Success! plugin {settings.display_name} is migrated to {SDK_MODULE_PATH} {settings.sdk_version}."
        )
        if result.vendors_dependencies:
            result.add_message(
                INFO, "It looks like this plugin vendors dependencies. Don't forget to run `go mod vendor`."
            )
        result.add_message(INFO, "Make sure to review all changes and run all tests.")
        return result

    def _run_checks(self, settings: ProjectSettings, result: MigrationResult) -> None:
        check_service = self.check_service or CheckService(rules=registry(settings.deprecations_file))
        try:
            report = check_service.check(settings.plugin_path, settings.repo_name)
        except AlreadyMigrated as e:
            failure = str(e)
        else:
            result.check_report = report
            result.messages.extend(report.messages)
            failure = None if report.migratable else report.messages[-1][1]

        if failure is None:
            return

        result.add_message(WARN, failure)
        if not settings.force:
            raise EligibilityCheckFailed(result)

        logger.warning(f"Forcing migration of {settings.plugin_path} despite failed checks")
        result.forced = True
        result.add_message(WARN, "Ignoring failed eligibility checks")
