"""Shared pytest fixtures for the Dev Helper test suite.

Provides reusable fixtures for:
- Temporary project directories
- A template renderer bound to the packaged templates
- A recording stand-in for the npm installer
- A fully wired dispatcher that never spawns real processes
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import pytest

from devhelper.config import Config
from devhelper.errors import InstallError
from devhelper.scaffolder import DependencyInstaller, TemplateRenderer
from devhelper.server import Dispatcher


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Temporary directory standing in for a generated project."""
    project_dir = tmp_path / "test-project"
    project_dir.mkdir()
    yield project_dir


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


# ---------------------------------------------------------------------------
# Installer stand-in
# ---------------------------------------------------------------------------

class RecordingInstaller(DependencyInstaller):
    """Installer that records calls instead of running npm.

    Set ``fail_with`` to make every install raise :class:`InstallError`.
    """

    def __init__(self, fail_with: Optional[str] = None) -> None:
        super().__init__(command=["npm", "install"])
        self.fail_with = fail_with
        self.calls: list[tuple[Path, list[str]]] = []

    async def install(self, project_dir: Path, dependencies: list[str]) -> None:
        self.calls.append((project_dir, list(dependencies)))
        if self.fail_with is not None:
            raise InstallError([*self.command, *dependencies], 1, self.fail_with)


@pytest.fixture
def installer() -> RecordingInstaller:
    return RecordingInstaller()


@pytest.fixture
def failing_installer() -> RecordingInstaller:
    return RecordingInstaller(fail_with="npm ERR! 404 Not Found")


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------

@pytest.fixture
def config() -> Config:
    return Config()


@pytest.fixture
def dispatcher(config: Config, renderer: TemplateRenderer, installer: RecordingInstaller) -> Dispatcher:
    """Dispatcher wired to the real generators and the recording installer."""
    return Dispatcher(config, renderer=renderer, installer=installer)
