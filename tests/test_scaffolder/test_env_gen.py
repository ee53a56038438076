"""Tests for environment file generation.

Covers:
- .env.<type> contents per environment type
- .env.example value stripping (line for line)
- Optional dependency install: success, failure, skipped
- Partial write when .env.example cannot be written
"""

from __future__ import annotations

from pathlib import Path

import pytest

from devhelper.errors import FilesystemError, PartialWriteError
from devhelper.scaffolder.env_gen import EnvGenerator, strip_env_values
from devhelper.scaffolder.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


class TestStripEnvValues:
    def test_strips_values(self):
        assert strip_env_values("A=1\nB=two words\n") == "A=\nB=\n"

    def test_keeps_lines_without_values(self):
        text = "# Header\n\nEMPTY=\n"
        assert strip_env_values(text) == text

    def test_commented_assignments_also_stripped(self):
        assert strip_env_values("# SMTP_PORT=587") == "# SMTP_PORT="


class TestRenderEnv:
    @pytest.mark.parametrize("env_type", ["development", "production", "testing"])
    def test_header_and_node_env(self, renderer: TemplateRenderer, installer, env_type: str):
        text = EnvGenerator(renderer, installer).render_env(env_type)
        lines = text.splitlines()
        assert lines[0] == f"# {env_type.upper()} Environment Variables"
        assert lines[1] == f"NODE_ENV={env_type}"

    def test_defaults(self, renderer: TemplateRenderer, installer):
        text = EnvGenerator(renderer, installer).render_env("development")
        assert "PORT=5000" in text.splitlines()
        assert "MONGODB_URI=mongodb://localhost:27017/myapp" in text
        assert "DB_NAME=myapp" in text
        assert "JWT_SECRET=" in text
        assert "CORS_ORIGIN=http://localhost:3000" in text


class TestSetup:
    async def test_writes_both_files(self, renderer, installer, tmp_project_dir: Path):
        result = await EnvGenerator(renderer, installer).setup(tmp_project_dir, "production")

        assert result.env_file == tmp_project_dir / ".env.production"
        assert result.example_file == tmp_project_dir / ".env.example"
        env_lines = result.env_file.read_text(encoding="utf-8").splitlines()
        example_lines = result.example_file.read_text(encoding="utf-8").splitlines()
        assert len(env_lines) == len(example_lines)
        for env_line, example_line in zip(env_lines, example_lines):
            if "=" in env_line:
                assert example_line == env_line.split("=", 1)[0] + "="
            else:
                assert example_line == env_line
        assert not result.install_failed
        assert installer.calls == []

    async def test_installs_dependencies(self, renderer, installer, tmp_project_dir: Path):
        result = await EnvGenerator(renderer, installer).setup(
            tmp_project_dir, "development", ["express", "cors"]
        )
        assert installer.calls == [(tmp_project_dir, ["express", "cors"])]
        assert result.installed == ["express", "cors"]
        assert not result.install_failed

    async def test_install_failure_keeps_files(
        self, renderer, failing_installer, tmp_project_dir: Path
    ):
        result = await EnvGenerator(renderer, failing_installer).setup(
            tmp_project_dir, "testing", ["no-such-package"]
        )
        assert result.install_failed
        assert "npm ERR! 404" in str(result.install_error)
        assert result.installed == []
        assert (tmp_project_dir / ".env.testing").is_file()
        assert (tmp_project_dir / ".env.example").is_file()

    async def test_missing_project_dir(self, renderer, installer, tmp_path: Path):
        with pytest.raises(FilesystemError) as exc_info:
            await EnvGenerator(renderer, installer).setup(tmp_path / "missing", "development")
        assert not isinstance(exc_info.value, PartialWriteError)

    async def test_example_write_failure_is_partial(
        self, renderer, installer, tmp_project_dir: Path
    ):
        (tmp_project_dir / ".env.example").mkdir()

        with pytest.raises(PartialWriteError) as exc_info:
            await EnvGenerator(renderer, installer).setup(
                tmp_project_dir, "development", ["express"]
            )

        assert exc_info.value.written == [tmp_project_dir / ".env.development"]
        assert (tmp_project_dir / ".env.development").is_file()
        assert installer.calls == []
