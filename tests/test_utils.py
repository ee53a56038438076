"""Unit tests for utility functions (devhelper.utils).

Tests cover:
- run_command (success, failure, timeout, env vars, capture=False, missing binary)
- setup_logging (Rich handler installed once, SDK logger quietened)
- Rich output helpers (print_catalog_table, print_success, print_error)
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest
from rich.logging import RichHandler

from devhelper.catalog import list_capabilities
from devhelper.utils import (
    console,
    print_catalog_table,
    print_error,
    print_success,
    run_command,
    setup_logging,
)


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# run_command
# ---------------------------------------------------------------------------


class TestRunCommand:
    async def test_success_captures_stdout(self):
        rc, out, err = await run_command([sys.executable, "-c", "print('hello')"])
        assert rc == 0
        assert out == "hello"
        assert err == ""

    async def test_failure_returns_exit_code_and_stderr(self):
        rc, _, err = await run_command(
            [sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(3)"]
        )
        assert rc == 3
        assert err == "boom"

    async def test_runs_in_cwd(self, tmp_path: Path):
        rc, out, _ = await run_command(
            [sys.executable, "-c", "import os; print(os.getcwd())"], cwd=tmp_path
        )
        assert rc == 0
        assert Path(out).resolve() == tmp_path.resolve()

    async def test_extra_env_is_merged(self):
        rc, out, _ = await run_command(
            [sys.executable, "-c", "import os; print(os.environ['DEVHELPER_PROBE'])"],
            env={"DEVHELPER_PROBE": "present"},
        )
        assert rc == 0
        assert out == "present"

    async def test_timeout_kills_process(self):
        rc, out, err = await run_command(
            [sys.executable, "-c", "import time; time.sleep(30)"], timeout=0.5
        )
        assert rc == -1
        assert out == ""
        assert "timed out" in err

    async def test_no_capture_returns_empty_strings(self):
        rc, out, err = await run_command(
            [sys.executable, "-c", "print('to stderr instead')"], capture=False
        )
        assert rc == 0
        assert out == ""
        assert err == ""

    async def test_no_capture_keeps_child_stdout_off_our_stdout(self, capfd):
        await run_command([sys.executable, "-c", "print('install chatter')"], capture=False)
        captured = capfd.readouterr()
        assert "install chatter" not in captured.out
        assert "install chatter" in captured.err

    async def test_missing_executable_raises(self):
        with pytest.raises(OSError):
            await run_command(["definitely-not-a-real-binary-devhelper"])


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


class TestSetupLogging:
    @pytest.fixture(autouse=True)
    def _restore_root_logger(self):
        root = logging.getLogger()
        handlers = list(root.handlers)
        level = root.level
        mcp_level = logging.getLogger("mcp").level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)
        logging.getLogger("mcp").setLevel(mcp_level)

    def test_installs_single_rich_handler(self):
        setup_logging("DEBUG")
        setup_logging("DEBUG")
        rich_handlers = [h for h in logging.getLogger().handlers if isinstance(h, RichHandler)]
        assert len(rich_handlers) == 1

    def test_sets_root_level(self):
        setup_logging("WARNING")
        assert logging.getLogger().level == logging.WARNING

    def test_sdk_logger_not_below_warning(self):
        setup_logging("DEBUG")
        assert logging.getLogger("mcp").level == logging.WARNING

    def test_sdk_logger_follows_stricter_level(self):
        setup_logging("ERROR")
        assert logging.getLogger("mcp").level == logging.ERROR


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


class TestRichHelpers:
    def test_console_writes_to_stderr(self):
        assert console.stderr is True

    def test_catalog_table_lists_every_tool(self):
        with console.capture() as capture:
            print_catalog_table(list_capabilities(), title="Catalog")
        output = capture.get()
        assert "Catalog" in output
        assert "create_mern_project" in output
        assert "create_package_scripts" in output

    def test_print_success(self):
        with console.capture() as capture:
            print_success("All done")
        assert "All done" in capture.get()

    def test_print_error(self):
        with console.capture() as capture:
            print_error("Went wrong")
        assert "Went wrong" in capture.get()
