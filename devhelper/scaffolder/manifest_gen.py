"""npm script management for an existing (or new) ``package.json``."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Optional

from devhelper import filesystem
from devhelper.errors import FilesystemError

logger = logging.getLogger(__name__)

# Lowest precedence: existing manifest scripts override these, and
# caller-supplied scripts override both.
DEFAULT_SCRIPTS: dict[str, str] = {
    "start": "node server.js",
    "dev": "nodemon server.js",
    "build": "echo 'No build script defined'",
    "test": "jest",
    "lint": "eslint .",
    "lint:fix": "eslint . --fix",
    "format": "prettier --write .",
    "prepare": "husky install",
}


def merge_scripts(
    existing: Optional[dict[str, str]] = None,
    custom: Optional[dict[str, str]] = None,
    defaults: Optional[dict[str, str]] = None,
) -> dict[str, str]:
    """Merge script mappings: defaults, then *existing*, then *custom*."""
    merged = dict(DEFAULT_SCRIPTS if defaults is None else defaults)
    merged.update(existing or {})
    merged.update(custom or {})
    return merged


def default_manifest(project_dir: Path) -> dict[str, Any]:
    """Minimal manifest used when the project has no readable ``package.json``."""
    return {
        "name": project_dir.name,
        "version": "1.0.0",
        "description": "",
        "main": "index.js",
        "scripts": {},
    }


class ManifestGenerator:
    """Reads, merges and rewrites ``package.json`` scripts."""

    async def load(self, project_dir: Path) -> dict[str, Any]:
        """Load ``package.json`` from *project_dir*.

        A missing, unreadable or malformed manifest falls back to
        :func:`default_manifest`.
        """
        path = project_dir / "package.json"
        if not path.is_file():
            return default_manifest(project_dir)
        try:
            raw = await asyncio.to_thread(filesystem.read_text, path)
            data = json.loads(raw)
        except (FilesystemError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unusable manifest %s: %s", path, exc)
            return default_manifest(project_dir)
        if not isinstance(data, dict):
            logger.warning("Ignoring manifest %s: top level is not an object", path)
            return default_manifest(project_dir)
        return data

    async def update_scripts(
        self,
        project_dir: Path,
        scripts: Optional[dict[str, str]] = None,
    ) -> tuple[Path, dict[str, str]]:
        """Merge scripts into the project's manifest and write it back.

        Returns:
            ``(manifest_path, merged_scripts)``.
        """
        manifest = await self.load(project_dir)
        existing = manifest.get("scripts")
        if not isinstance(existing, dict):
            existing = {}
        manifest["scripts"] = merge_scripts(existing, scripts)

        path = project_dir / "package.json"
        await asyncio.to_thread(
            filesystem.write_text, path, json.dumps(manifest, indent=2)
        )
        return path, manifest["scripts"]
