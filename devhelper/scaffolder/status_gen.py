"""Project structure report: an indented, iconified directory listing."""

from __future__ import annotations

import asyncio
from pathlib import Path

from devhelper import filesystem
from devhelper.errors import FilesystemError, GeneratorError
from devhelper.filesystem import ProjectDirectoryEntry

DIRECTORY_ICON = "📁"
FILE_ICON = "📄"
INDENT = "  "


def render_tree(entries: list[ProjectDirectoryEntry], prefix: str = "") -> str:
    """Render *entries* one per line; each nesting level adds two spaces."""
    lines: list[str] = []
    for entry in entries:
        if entry.is_directory:
            lines.append(f"{prefix}{DIRECTORY_ICON} {entry.name}/\n")
            lines.append(render_tree(entry.children, prefix + INDENT))
        else:
            lines.append(f"{prefix}{FILE_ICON} {entry.name}\n")
    return "".join(lines)


class StatusReporter:
    """Walks a project directory and renders its structure."""

    async def report(self, project_dir: Path) -> str:
        try:
            entries = await asyncio.to_thread(filesystem.walk, project_dir)
        except FilesystemError as exc:
            raise GeneratorError(f"Cannot read project at {project_dir}: {exc.reason}") from exc
        return render_tree(entries)
