"""
go.mod reading and editing.

Line-based editor for the ``require`` directives of a go.mod file. Every
line it does not touch is written back verbatim.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Union

from ..constants import GO_MOD_FILE, PACKER_MODULE_PATH, SDK_MODULE_PATH
from ..errors import GoModError

logger = logging.getLogger(__name__)

_BLOCK_START = re.compile(r'^\s*require\s*\(\s*(//.*)?$')
_BLOCK_END = re.compile(r'^\s*\)\s*(//.*)?$')
_SINGLE = re.compile(r'^\s*require\s+(?P<spec>[^(].*)$')
_MODULE = re.compile(r'^\s*module\s+"?(?P<path>[^\s"]+)"?')


@dataclass
class Requirement:
    """One module requirement and where it sits in the file."""

    path: str
    version: str
    line: int
    in_block: bool
    indirect: bool = False


def _parse_spec(spec: str) -> Optional[tuple]:
    code, _, comment = spec.partition('//')
    fields = code.split()
    if len(fields) != 2:
        return None
    path = fields[0].strip('"')
    return path, fields[1], comment.strip() == 'indirect'


class GoModFile:
    """A go.mod file held as lines."""

    def __init__(self, path: Union[str, Path], text: str):
        self.path = Path(path)
        self.lines: List[str] = text.splitlines()

    @classmethod
    def load(cls, module_root: Union[str, Path]) -> "GoModFile":
        path = Path(module_root) / GO_MOD_FILE
        try:
            return cls(path, path.read_text(encoding='utf-8'))
        except FileNotFoundError:
            raise GoModError(f"{GO_MOD_FILE} not found in {module_root}")

    @property
    def module_path(self) -> Optional[str]:
        for line in self.lines:
            match = _MODULE.match(line)
            if match:
                return match.group('path')
        return None

    def requirements(self) -> Iterator[Requirement]:
        in_block = False
        for index, line in enumerate(self.lines):
            if in_block:
                if _BLOCK_END.match(line):
                    in_block = False
                    continue
                parsed = _parse_spec(line)
                if parsed:
                    yield Requirement(parsed[0], parsed[1], index, True, parsed[2])
            elif _BLOCK_START.match(line):
                in_block = True
            else:
                match = _SINGLE.match(line)
                if match:
                    parsed = _parse_spec(match.group('spec'))
                    if parsed is None:
                        raise GoModError(f"{self.path}:{index + 1}: malformed require directive")
                    yield Requirement(parsed[0], parsed[1], index, False, parsed[2])
        if in_block:
            raise GoModError(f"{self.path}: unterminated require block")

    def version_of(self, module_path: str) -> Optional[str]:
        for requirement in self.requirements():
            if requirement.path == module_path:
                return requirement.version
        return None

    def drop_require(self, module_path: str) -> bool:
        doomed = {r.line for r in self.requirements() if r.path == module_path}
        if not doomed:
            return False
        self.lines = [line for index, line in enumerate(self.lines) if index not in doomed]
        self._cleanup()
        return True

    def set_require(self, module_path: str, version: str) -> None:
        """Add a requirement, or update its version if it is already required."""
        existing = [r for r in self.requirements() if r.path == module_path]
        if existing:
            for requirement in existing:
                line = self.lines[requirement.line]
                self.lines[requirement.line] = line.replace(requirement.version, version, 1)
            return

        blocks = [r for r in self.requirements() if r.in_block]
        if blocks:
            insert_at = self._block_insert_position(module_path)
            self.lines.insert(insert_at, f"\t{module_path} {version}")
            return

        insert_at = len(self.lines)
        for index, line in enumerate(self.lines):
            if line.strip().startswith('go ') or _MODULE.match(line):
                insert_at = index + 1
        self.lines[insert_at:insert_at] = ["", f"require {module_path} {version}"]

    def _block_insert_position(self, module_path: str) -> int:
        """Sorted position inside the first require block."""
        start = next(i for i, line in enumerate(self.lines) if _BLOCK_START.match(line))
        index = start + 1
        while not _BLOCK_END.match(self.lines[index]):
            parsed = _parse_spec(self.lines[index])
            if parsed and parsed[0] > module_path:
                return index
            index += 1
        return index

    def _cleanup(self) -> None:
        """Remove require blocks left empty."""
        cleaned: List[str] = []
        index = 0
        while index < len(self.lines):
            line = self.lines[index]
            if _BLOCK_START.match(line):
                end = index + 1
                while end < len(self.lines) and not _BLOCK_END.match(self.lines[end]):
                    end += 1
                body = [l for l in self.lines[index + 1:end] if l.strip()]
                if not body:
                    index = end + 1
                    # avoid leaving two blank lines behind
                    if cleaned and not cleaned[-1].strip() and index < len(self.lines) and not self.lines[index].strip():
                        index += 1
                    continue
            cleaned.append(line)
            index += 1
        self.lines = cleaned

    def text(self) -> str:
        return "\n".join(self.lines).rstrip("\n") + "\n"

    def save(self) -> None:
        self.path.write_text(self.text(), encoding='utf-8')


def rewrite_go_mod(
    module_root: Union[str, Path],
    sdk_version: str,
    old_module: str = PACKER_MODULE_PATH,
    new_module: str = SDK_MODULE_PATH,
    dry_run: bool = False,
) -> GoModFile:
    """
    Swap the Packer core requirement for the plugin SDK.

    Args:
        module_root: Directory holding go.mod
        sdk_version: SDK version to require
        old_module: Module path to drop
        new_module: Module path to add or update
        dry_run: Edit in memory only

    Returns:
        The edited GoModFile
    """
    gomod = GoModFile.load(module_root)
    if not gomod.drop_require(old_module):
        logger.warning(f"{gomod.path} does not require {old_module}")
    gomod.set_require(new_module, sdk_version)
    if not dry_run:
        gomod.save()
        logger.info(f"Rewrote {gomod.path}: {old_module} replaced by {new_module} {sdk_version}")
    return gomod
