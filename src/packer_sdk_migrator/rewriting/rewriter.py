"""
Import rewriter.

Rewrites a Go file's imports from Packer core paths to plugin SDK paths and
fixes every qualified reference that depends on a renamed or split package.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from ..errors import AmbiguousSplitError, NotFoundError
from ..mapping import (
    ImportPathClassifier,
    OneToOne,
    Rename,
    Split,
    default_alias,
    default_classifier,
)
from ..parsing import BLANK_IMPORT, DOT_IMPORT, GoSourceParser, ImportSpec, ParsedGoFile
from .edits import EditPlan, TextEdit, apply_edits
from .import_block import ImportBlockEditor

logger = logging.getLogger(__name__)

# Alias prefix for a split destination whose name is taken by the kept old import
SDK_ALIAS_PREFIX = "sdk"


@dataclass
class RewriteResult:
    """Outcome of rewriting one file."""

    filename: str
    changed: bool = False
    written: bool = False
    references_rewritten: int = 0
    imports_replaced: List[str] = field(default_factory=list)
    imports_added: List[str] = field(default_factory=list)
    imports_removed: List[str] = field(default_factory=list)
    ambiguous: Dict[str, List[str]] = field(default_factory=dict)
    content: bytes = b""


class ImportRewriter:
    """
    Rewrite Go import declarations and the references that depend on them.

    Edits are collected over the whole file before any is applied; imports
    are added or removed once per distinct path after the walk.

    Args:
        classifier: Import path classifier (defaults to the bundled tables)
        parser: Go source parser
        strict: Raise AmbiguousSplitError instead of warning when a reference
            through a split package cannot be routed to a destination
    """

    def __init__(
        self,
        classifier: Optional[ImportPathClassifier] = None,
        parser: Optional[GoSourceParser] = None,
        strict: bool = False,
    ):
        self.classifier = classifier or default_classifier()
        self.parser = parser or GoSourceParser()
        self.strict = strict

    def rewrite_file(self, file_path: Union[str, Path], dry_run: bool = False) -> RewriteResult:
        """
        Rewrite one Go file in place.

        The file is only written when the rewrite produced different content,
        and never when parsing fails.

        Args:
            file_path: Path of the Go source file
            dry_run: Compute the rewrite without writing it

        Returns:
            RewriteResult describing the changes

        Raises:
            NotFoundError: If the file does not exist
            GoSyntaxError: If the file cannot be parsed
            AmbiguousSplitError: In strict mode, for unroutable split references
        """
        path = Path(file_path)
        if not path.is_file():
            raise NotFoundError(f"Go source file not found: {path}")

        result = self.rewrite_source(path.read_bytes(), str(path))
        if result.changed and not dry_run:
            path.write_bytes(result.content)
            result.written = True
            logger.info(f"Rewrote imports in {path}")
        return result

    def rewrite_source(self, source: bytes, filename: str = "<unknown>") -> RewriteResult:
        """Rewrite Go source held in memory."""
        parsed = self.parser.parse(source, filename)
        result = RewriteResult(filename=filename)

        plan = self.collect_edits(parsed, result)
        # Applied even when the plan is empty: the import block is still
        # brought into sorted order.
        content = self._apply(parsed, plan, result)

        result.content = content
        result.changed = content != source
        return result

    def collect_edits(self, parsed: ParsedGoFile, result: Optional[RewriteResult] = None) -> EditPlan:
        """Walk the file and record every edit without applying any of them."""
        if result is None:
            result = RewriteResult(filename=parsed.filename)
        plan = EditPlan()
        references = parsed.qualified_references()

        for spec in parsed.imports:
            disposition = self.classifier.classify(spec.path)

            if isinstance(disposition, OneToOne):
                logger.info(f"Changing import of {spec.path} to {disposition.new_path}")
                plan.replace_path(spec.start_byte, spec.path, disposition.new_path)
                result.imports_replaced.append(spec.path)

            elif isinstance(disposition, Rename):
                logger.info(f"Changing import of {spec.path} to {disposition.new_path}")
                plan.replace_path(
                    spec.start_byte, spec.path, disposition.new_path,
                    drop_alias=spec.has_explicit_alias,
                )
                result.imports_replaced.append(spec.path)
                if spec.name in (BLANK_IMPORT, DOT_IMPORT):
                    continue
                old_alias = spec.effective_alias
                for ref in references:
                    if ref.alias == old_alias:
                        plan.rename_alias(ref.alias_start, ref.alias_end, old_alias, disposition.new_alias)
                        result.references_rewritten += 1
                        logger.debug(f"renamed {old_alias} to {disposition.new_alias} at {ref.position}")

            elif isinstance(disposition, Split):
                self._collect_split(parsed, spec, disposition, references, plan, result)

        return plan

    def _collect_split(self, parsed, spec: ImportSpec, disposition: Split, references, plan, result) -> None:
        logger.info(
            f"Package {spec.path} has been refactored into multiple new SDK packages; "
            f"updating each reference in {parsed.filename}"
        )
        if spec.name in (BLANK_IMPORT, DOT_IMPORT):
            logger.warning(
                f"{parsed.filename}: {spec.path} is imported as '{spec.name}'; "
                f"its references cannot be routed automatically"
            )
            return

        old_alias = spec.effective_alias
        routed = []
        unresolved: List[str] = []
        for ref in references:
            if ref.alias != old_alias:
                continue
            new_path = disposition.destination(ref.identifier)
            if new_path is None:
                unresolved.append(ref.identifier)
            else:
                routed.append((ref, new_path))

        if unresolved:
            result.ambiguous[spec.path] = sorted(set(unresolved))
            if self.strict:
                raise AmbiguousSplitError(parsed.filename, spec.path, unresolved)
            logger.warning(
                f"{parsed.filename}: no SDK package is known for "
                f"{', '.join(result.ambiguous[spec.path])} from {spec.path}; "
                f"keeping the old import for manual review"
            )

        for ref, new_path in routed:
            base_alias = default_alias(new_path)
            if spec.has_explicit_alias:
                # Keep a custom import name visible in the new alias.
                new_alias = f"{old_alias}_{base_alias}"
            elif unresolved and base_alias == old_alias:
                # The kept old import still owns this name.
                new_alias = f"{SDK_ALIAS_PREFIX}{base_alias}"
            else:
                new_alias = base_alias

            plan.rename_alias(ref.alias_start, ref.alias_end, old_alias, new_alias)
            plan.add_import(new_path, new_alias if new_alias != base_alias else None, spec.path)
            result.references_rewritten += 1
            logger.debug(f"{ref.position}: {old_alias}.{ref.identifier} now imported from {new_path}")

        if routed and not unresolved:
            plan.remove_import(spec.path, spec.name)

    def _apply(self, parsed: ParsedGoFile, plan: EditPlan, result: RewriteResult) -> bytes:
        editor = ImportBlockEditor(parsed.source, parsed.import_declarations)

        for replacement in plan.replacements:
            editor.replace_path(replacement.spec_start, replacement.new_path, replacement.drop_alias)

        # Additions and removals are applied after the walk, once per path.
        for addition in plan.additions.values():
            if editor.add_import(addition.path, addition.name, addition.anchor_path):
                result.imports_added.append(addition.path)
        for removal in plan.removals.values():
            if editor.remove_import(removal.path, removal.name):
                result.imports_removed.append(removal.path)
            else:
                logger.warning(f"issue deleting import {removal.path}; may need to manually delete")

        edits = editor.edits()
        edits.extend(
            TextEdit(rename.start, rename.end, rename.new_alias.encode('utf8'))
            for rename in plan.renames.values()
        )
        return apply_edits(parsed.source, edits)
