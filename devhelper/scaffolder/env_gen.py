"""Environment file generation for Node.js projects.

Writes ``.env.<type>`` from ``env.j2`` and a matching ``.env.example`` with
every value stripped, then optionally installs extra npm dependencies.
"""

from __future__ import annotations

import asyncio
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from devhelper import filesystem
from devhelper.errors import FilesystemError, InstallError, PartialWriteError

from .installer import DependencyInstaller
from .templates import TemplateRenderer

ENV_DEFAULTS: dict[str, object] = {
    "port": 5000,
    "db_name": "myapp",
}

_VALUE_PATTERN = re.compile(r"=.+$", re.MULTILINE)


def strip_env_values(content: str) -> str:
    """Turn every ``KEY=value`` line into ``KEY=``; everything else is kept."""
    return _VALUE_PATTERN.sub("=", content)


@dataclass
class EnvSetupResult:
    """Outcome of :meth:`EnvGenerator.setup`."""

    env_file: Path
    example_file: Path
    installed: list[str] = field(default_factory=list)
    install_error: Optional[InstallError] = None

    @property
    def install_failed(self) -> bool:
        return self.install_error is not None


class EnvGenerator:
    """Generates dotenv files and runs the optional install step."""

    def __init__(self, renderer: TemplateRenderer, installer: DependencyInstaller) -> None:
        self.renderer = renderer
        self.installer = installer

    def render_env(self, env_type: str) -> str:
        return self.renderer.render("env.j2", {"env_type": env_type, **ENV_DEFAULTS})

    async def setup(
        self,
        project_dir: Path,
        env_type: str,
        dependencies: Optional[list[str]] = None,
    ) -> EnvSetupResult:
        """Write the env files, then install *dependencies* if any.

        An install failure is returned on the result, not raised: the two
        files are already written and stay in place.
        """
        content = self.render_env(env_type)
        env_file = project_dir / f".env.{env_type}"
        example_file = project_dir / ".env.example"

        await asyncio.to_thread(filesystem.write_text, env_file, content)
        try:
            await asyncio.to_thread(
                filesystem.write_text, example_file, strip_env_values(content)
            )
        except FilesystemError as exc:
            raise PartialWriteError([env_file], exc) from exc

        result = EnvSetupResult(env_file=env_file, example_file=example_file)
        if dependencies:
            try:
                await self.installer.install(project_dir, dependencies)
            except InstallError as exc:
                result.install_error = exc
            else:
                result.installed = list(dependencies)
        return result
