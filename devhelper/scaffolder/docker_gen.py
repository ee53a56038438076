"""Docker Compose, .dockerignore and Dockerfile generation.

Uses the Jinja2 templates ``docker-compose.yml.j2``, ``server.Dockerfile.j2``
and ``client.Dockerfile.j2`` to produce container configuration for a
generated MERN project.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from devhelper import filesystem
from devhelper.errors import FilesystemError, PartialWriteError

from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

# Service blocks always render in this order, whatever order was requested.
COMPOSE_ORDER: tuple[str, ...] = ("database", "server", "client", "nginx")

DATABASE_DEFAULTS: dict[str, Any] = {
    "image": "mongo:latest",
    "username": "root",
    "password": "password",
    "port": 27017,
    "name": "myapp",
}

SERVICE_PORTS: dict[str, int] = {
    "server": 5000,
    "client": 3000,
    "nginx": 80,
}

DOCKERIGNORE_PATTERNS: tuple[str, ...] = (
    "node_modules",
    "npm-debug.log",
    ".git",
    ".gitignore",
    "README.md",
    ".env",
    ".nyc_output",
    "coverage",
    ".coverage",
    "*.log",
)


def ordered_services(services: list[str]) -> list[str]:
    """Return the requested services in compose order, without duplicates."""
    unknown = sorted(set(services) - set(COMPOSE_ORDER))
    if unknown:
        raise ValueError(f"Unknown service(s): {', '.join(unknown)}")
    return [name for name in COMPOSE_ORDER if name in services]


class DockerGenerator:
    """Generates Compose files and per-service Dockerfiles."""

    # Service -> Dockerfile template
    _DOCKERFILES: dict[str, str] = {
        "server": "server.Dockerfile.j2",
        "client": "client.Dockerfile.j2",
    }

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    # -- Compose -----------------------------------------------------------

    def render_compose(self, services: list[str]) -> str:
        context = {
            "services": ordered_services(services),
            "database": DATABASE_DEFAULTS,
            "ports": SERVICE_PORTS,
        }
        return self.renderer.render("docker-compose.yml.j2", context)

    @staticmethod
    def render_dockerignore() -> str:
        return "\n".join(DOCKERIGNORE_PATTERNS) + "\n"

    async def generate_compose(
        self,
        project_dir: Path,
        services: list[str],
    ) -> list[Path]:
        """Write ``docker-compose.yml`` and ``.dockerignore`` into *project_dir*.

        Both files are rendered before anything is written. The writes are
        not transactional: if ``.dockerignore`` fails, the Compose file
        stays on disk and :class:`PartialWriteError` says so.

        Returns:
            The written paths, Compose file first.
        """
        compose = self.render_compose(services)
        ignore = self.render_dockerignore()

        plan = [
            (project_dir / "docker-compose.yml", compose),
            (project_dir / ".dockerignore", ignore),
        ]
        written: list[Path] = []
        for path, content in plan:
            try:
                await asyncio.to_thread(filesystem.write_text, path, content)
            except FilesystemError as exc:
                if written:
                    raise PartialWriteError(written, exc) from exc
                raise
            written.append(path)
        return written

    # -- Dockerfiles -------------------------------------------------------

    def render_dockerfile(self, service: str, node_version: str) -> str:
        template = self._DOCKERFILES.get(service)
        if template is None:
            raise ValueError(f"No Dockerfile template for service: {service}")
        context = {"node_version": node_version, "port": SERVICE_PORTS[service]}
        return self.renderer.render(template, context)

    async def generate_dockerfile(
        self,
        project_dir: Path,
        service: str,
        node_version: str,
    ) -> tuple[Path, str]:
        """Write ``<project_dir>/<service>/Dockerfile``.

        The service directory is created when missing.

        Returns:
            ``(path, content)`` of the written Dockerfile.
        """
        content = self.render_dockerfile(service, node_version)
        service_dir = project_dir / service
        await asyncio.to_thread(filesystem.make_directories, service_dir)
        out = service_dir / "Dockerfile"
        await asyncio.to_thread(filesystem.write_text, out, content)
        return out, content
