"""MERN project skeleton generation.

Creates ``<path>/<name>`` with ``client/`` and ``server/`` subdirectories
and a root ``package.json`` that drives both halves.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path, PurePath
from typing import Any

from devhelper import filesystem

PROJECT_SCRIPTS: dict[str, str] = {
    "dev": 'concurrently "npm run server" "npm run client"',
    "server": "cd server && npm run dev",
    "client": "cd client && npm start",
    "build": "cd client && npm run build",
    "install-deps": "npm install && cd server && npm install && cd ../client && npm install",
}

PROJECT_DEV_DEPENDENCIES: dict[str, str] = {
    "concurrently": "^8.2.0",
}

SUBDIRECTORIES = ("client", "server")


def build_root_manifest(project_name: str) -> dict[str, Any]:
    """Return the root ``package.json`` payload for a new project."""
    return {
        "name": project_name,
        "version": "1.0.0",
        "description": "MERN stack application",
        "scripts": dict(PROJECT_SCRIPTS),
        "devDependencies": dict(PROJECT_DEV_DEPENDENCIES),
    }


def project_root_for(parent_dir: str | Path, project_name: str) -> Path:
    """Resolve the project root, always nested under *parent_dir*.

    A leading root or drive in *project_name* is dropped, so an absolute
    name still lands inside *parent_dir*. Names that climb out with ``..``
    are rejected.
    """
    name = PurePath(project_name)
    parts = name.parts[1:] if name.anchor else name.parts
    if not parts:
        raise ValueError(f"projectName does not name a directory: {project_name!r}")
    if ".." in parts:
        raise ValueError(f"projectName must stay inside path: {project_name!r}")
    return Path(parent_dir).joinpath(*parts)


class ProjectGenerator:
    """Creates the MERN directory skeleton and root manifest."""

    async def generate(self, project_name: str, parent_dir: str | Path) -> Path:
        """Create the project under *parent_dir*.

        Re-running over an existing project is fine: directories are created
        only when missing and the manifest is overwritten.

        Returns:
            Path to the project root.
        """
        if not project_name.strip():
            raise ValueError("projectName must not be empty")

        project_root = project_root_for(parent_dir, project_name)
        await asyncio.to_thread(filesystem.make_directories, project_root)
        for sub in SUBDIRECTORIES:
            await asyncio.to_thread(filesystem.make_directories, project_root / sub)

        manifest = json.dumps(build_root_manifest(project_name), indent=2)
        await asyncio.to_thread(
            filesystem.write_text, project_root / "package.json", manifest
        )
        return project_root
