"""Exception hierarchy for the Dev Helper server.

Generators raise these; only the dispatcher catches them and turns them
into in-band ``Error: ...`` text.
"""

from __future__ import annotations

from pathlib import Path


class DevHelperError(Exception):
    """Base class for every error raised by the tool server."""


class GeneratorError(DevHelperError):
    """Raised when a generator's precondition is not met."""


class FilesystemError(GeneratorError):
    """Uniform wrapper for any I/O failure in the filesystem gateway."""

    def __init__(self, operation: str, path: str | Path, reason: str) -> None:
        self.operation = operation
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot {operation} {path}: {reason}")


class PartialWriteError(GeneratorError):
    """Raised when a multi-file generator failed after earlier writes landed."""

    def __init__(self, written: list[Path], cause: Exception) -> None:
        self.written = list(written)
        self.cause = cause
        done = ", ".join(p.name for p in self.written) or "nothing"
        super().__init__(f"{cause} (already written: {done})")


class InstallError(DevHelperError):
    """Raised when the optional dependency install step fails."""

    def __init__(self, command: list[str], returncode: int, detail: str = "") -> None:
        self.command = list(command)
        self.returncode = returncode
        self.detail = detail
        message = f"Command failed: {' '.join(command)} (exit code {returncode})"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
