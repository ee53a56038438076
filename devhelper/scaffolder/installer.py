"""Synchronous npm dependency installation for a generated project."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from devhelper.errors import InstallError
from devhelper.utils import run_command

logger = logging.getLogger(__name__)


class DependencyInstaller:
    """Runs ``<command> <dependencies...>`` inside a project directory.

    The call blocks the current tool call until the process exits. With
    ``timeout=None`` there is no upper bound.
    """

    def __init__(
        self,
        command: Optional[list[str]] = None,
        timeout: Optional[int] = None,
    ) -> None:
        self.command = list(command or ["npm", "install"])
        self.timeout = timeout

    async def install(self, project_dir: Path, dependencies: list[str]) -> None:
        """Install *dependencies*; raise :class:`InstallError` on any failure."""
        if not dependencies:
            return

        cmd = [*self.command, *dependencies]
        logger.info("Installing %d package(s) in %s", len(dependencies), project_dir)
        try:
            returncode, _, stderr = await run_command(
                cmd, cwd=project_dir, timeout=self.timeout, capture=False
            )
        except OSError as exc:
            raise InstallError(cmd, -1, exc.strerror or str(exc)) from exc

        if returncode != 0:
            raise InstallError(cmd, returncode, stderr)
