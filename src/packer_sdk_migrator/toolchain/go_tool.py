"""
Go toolchain collaborator.

Wraps the ``go`` commands the migrator needs besides ``go list``: the
toolchain version and ``go mod tidy``. Calls block until the command exits;
there is no timeout.
"""

import logging
import os
import re
import subprocess
from typing import List, Optional, Protocol, Tuple

from ..constants import GO_BINARY_ENV
from ..errors import SubprocessFailure

logger = logging.getLogger(__name__)

# "go version go1.15.2 linux/amd64"
GO_VERSION_PATTERN = re.compile(r"\bgo(\d+(?:\.\d+)*)")


class DependencyTidier(Protocol):
    """Runs the module consistency pass after go.mod was edited."""

    def mod_tidy(self, module_root: str) -> None:
        ...


class GoToolchain:
    """Run ``go`` subcommands."""

    def __init__(self, go_binary: Optional[str] = None):
        self.go_binary = go_binary or os.getenv(GO_BINARY_ENV, "go")

    def _run(self, args: List[str], cwd: Optional[str] = None) -> Tuple[str, str]:
        """
        Execute a go command.

        Args:
            args: Arguments after the go binary
            cwd: Working directory

        Returns:
            Tuple of (stdout, stderr)

        Raises:
            SubprocessFailure: If the command cannot be started or exits non-zero
        """
        cmd = [self.go_binary] + args
        logger.debug(f"Executing command {cmd!r}")
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                env=os.environ.copy(),
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise SubprocessFailure(cmd, f"could not run {cmd[0]}: {e}")

        if result.returncode != 0:
            logger.error(f"Go command failed: {' '.join(cmd)}")
            raise SubprocessFailure(cmd, f"{' '.join(cmd)} exited with status {result.returncode}", result.stderr)
        return result.stdout, result.stderr

    def version(self) -> str:
        """
        Toolchain version without the ``go`` prefix, e.g. ``1.15.2``.

        Parsed from ``go version``, which every toolchain supports; ``go env
        GOVERSION`` only exists from Go 1.16 on.
        """
        stdout, _ = self._run(["version"])
        match = GO_VERSION_PATTERN.search(stdout)
        if match is None:
            raise SubprocessFailure([self.go_binary, "version"], f"unexpected go version output: {stdout.strip()!r}")
        return match.group(1)

    def mod_tidy(self, module_root: str) -> None:
        self._run(["mod", "tidy"], cwd=module_root)
        logger.info(f"go mod tidy completed in {module_root}")
