"""Shared utility functions for the Dev Helper server.

Provides async command execution, Rich-based logging and console output.
Everything here writes to stderr: stdout belongs to the MCP stdio transport
and must only ever carry protocol frames.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

if TYPE_CHECKING:
    from devhelper.catalog.capabilities import Capability

console = Console(stderr=True)

_STDERR_FD = 2

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def setup_logging(level: str = "INFO") -> None:
    """Route every ``devhelper`` and ``mcp`` logger through a Rich handler on stderr."""
    handler = RichHandler(console=console, show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    root = logging.getLogger()
    for existing in list(root.handlers):
        if isinstance(existing, RichHandler):
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    # The SDK logs every request at INFO.
    logging.getLogger("mcp").setLevel(max(logging.WARNING, root.level))


# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    timeout: Optional[float] = None,
    capture: bool = True,
    env: dict[str, str] | None = None,
) -> tuple[int, str, str]:
    """Run a command asynchronously without a shell.

    Args:
        cmd: Argument vector.
        cwd: Working directory for the child process.
        timeout: Maximum wall-clock seconds before the process is killed.
            ``None`` waits for as long as the process runs.
        capture: Whether to capture stdout/stderr. If ``False`` the child's
            stdout is sent to our stderr and its stderr is inherited.
        env: Optional extra environment variables merged on top of ``os.environ``.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple. If *capture* is ``False``
        the stdout/stderr strings will be empty.

    Raises:
        OSError: If the executable cannot be started.
    """
    merged_env: dict[str, str] | None = None
    if env:
        merged_env = {**os.environ, **env}

    if capture:
        stdout_target: int | None = asyncio.subprocess.PIPE
        stderr_target: int | None = asyncio.subprocess.PIPE
    else:
        stdout_target = _STDERR_FD
        stderr_target = None

    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdin=asyncio.subprocess.DEVNULL,
        stdout=stdout_target,
        stderr=stderr_target,
        cwd=str(cwd) if cwd else None,
        env=merged_env,
    )

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return (-1, "", f"Command timed out after {timeout}s: {' '.join(cmd)}")

    stdout_str = (stdout_bytes or b"").decode("utf-8", errors="replace").strip()
    stderr_str = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
    return (process.returncode or 0, stdout_str, stderr_str)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_catalog_table(capabilities: Iterable["Capability"], title: str = "Tools") -> None:
    """Print the tool catalog as a table: name, description, required inputs."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Tool", style="bold", no_wrap=True)
    table.add_column("Description")
    table.add_column("Required", style="dim")
    table.add_column("Optional", style="dim")

    for capability in capabilities:
        shape = capability.input_shape
        table.add_row(
            capability.name,
            capability.description,
            ", ".join(shape.required_fields()),
            ", ".join(shape.optional_fields()),
        )

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")
