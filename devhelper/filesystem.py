"""Scoped filesystem primitives used by every generator.

All functions are synchronous; generators call them through
``asyncio.to_thread``. Any ``OSError`` is re-raised as a single
:class:`~devhelper.errors.FilesystemError` so callers see one uniform
read/write failure. Nothing is retried.
"""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from devhelper.errors import FilesystemError


class ProjectDirectoryEntry(BaseModel):
    """One node of a project directory tree."""

    name: str
    kind: Literal["file", "directory"]
    children: list["ProjectDirectoryEntry"] = Field(default_factory=list)

    @property
    def is_directory(self) -> bool:
        return self.kind == "directory"


def make_directories(path: str | Path, recursive: bool = True) -> Path:
    """Create *path*. Already-existing directories are not an error."""
    target = Path(path)
    try:
        target.mkdir(parents=recursive, exist_ok=True)
    except OSError as exc:
        raise FilesystemError("create directory", target, _reason(exc)) from exc
    return target


def write_text(path: str | Path, content: str) -> Path:
    """Write *content* to *path* as UTF-8, replacing any existing file."""
    target = Path(path)
    try:
        target.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise FilesystemError("write", target, _reason(exc)) from exc
    return target


def read_text(path: str | Path) -> str:
    target = Path(path)
    try:
        return target.read_text(encoding="utf-8")
    except OSError as exc:
        raise FilesystemError("read", target, _reason(exc)) from exc


def list_entries(path: str | Path) -> list[str]:
    """Return entry names of a directory in the order the OS lists them."""
    target = Path(path)
    try:
        return os.listdir(target)
    except OSError as exc:
        raise FilesystemError("read", target, _reason(exc)) from exc


def stat_entry(path: str | Path) -> os.stat_result:
    target = Path(path)
    try:
        return target.stat()
    except OSError as exc:
        raise FilesystemError("stat", target, _reason(exc)) from exc


def walk(path: str | Path) -> list[ProjectDirectoryEntry]:
    """Build the directory tree under *path*.

    Dot-prefixed entries are skipped. Children keep the OS listing order;
    there is no depth limit.
    """
    root = Path(path)
    entries: list[ProjectDirectoryEntry] = []
    for name in list_entries(root):
        if name.startswith("."):
            continue
        item = root / name
        if _is_directory(item):
            entries.append(
                ProjectDirectoryEntry(name=name, kind="directory", children=walk(item))
            )
        else:
            entries.append(ProjectDirectoryEntry(name=name, kind="file"))
    return entries


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _is_directory(path: Path) -> bool:
    return stat.S_ISDIR(stat_entry(path).st_mode)


def _reason(exc: OSError) -> str:
    return exc.strerror or str(exc)
