"""Tests for Cursor setup and Anchor project bootstrap."""

import subprocess
import tempfile
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from solana_wingman.project import init_project, setup_cursor
from solana_wingman.project.anchor import CARGO_DEPENDENCIES, check_prerequisites
from solana_wingman.project.cursor import CONTEXT_TEMPLATE, SKILL_ROOT_ENV


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def skill_root(temp_dir):
    """A Solana Wingman checkout with rules and commands."""
    root = temp_dir / "skill"
    (root / ".cursor" / "commands").mkdir(parents=True)
    (root / ".cursorrules").write_text("# wingman rules\n")
    (root / ".cursor" / "commands" / "solana-audit.md").write_text("# audit\n")
    (root / ".cursor" / "commands" / "solana-build.md").write_text("# build\n")
    return root


class TestSetupCursor:
    """Test Cursor IDE configuration."""

    def test_writes_context_without_skill_root(self, temp_dir, monkeypatch):
        """Test the minimal setup with nothing to copy."""
        monkeypatch.delenv(SKILL_ROOT_ENV, raising=False)
        project = temp_dir / "project"

        result = setup_cursor(project)

        assert result.success
        assert (project / ".cursor" / "commands").is_dir()
        assert (project / ".cursor" / "solana-wingman.md").read_text() == CONTEXT_TEMPLATE
        assert not (project / ".cursorrules").exists()

    def test_copies_rules_and_commands(self, temp_dir, skill_root):
        """Test copying from a skill checkout."""
        project = temp_dir / "project"

        result = setup_cursor(project, skill_root=skill_root)

        assert result.success
        assert (project / ".cursorrules").read_text() == "# wingman rules\n"
        assert (project / ".cursor" / "commands" / "solana-audit.md").exists()
        assert (project / ".cursor" / "commands" / "solana-build.md").exists()
        assert any("solana-audit.md, solana-build.md" in a.description for a in result.actions)

    def test_existing_cursorrules_not_overwritten(self, temp_dir, skill_root):
        """Test that a project's own rules are kept."""
        project = temp_dir / "project"
        project.mkdir()
        (project / ".cursorrules").write_text("# mine\n")

        result = setup_cursor(project, skill_root=skill_root)

        assert (project / ".cursorrules").read_text() == "# mine\n"
        skipped = [a for a in result.actions if a.skipped]
        assert len(skipped) == 1
        assert "already exists" in skipped[0].description

    def test_skill_root_from_environment(self, temp_dir, skill_root, monkeypatch):
        """Test the SOLANA_WINGMAN_ROOT fallback."""
        monkeypatch.setenv(SKILL_ROOT_ENV, str(skill_root))
        project = temp_dir / "project"

        setup_cursor(project)

        assert (project / ".cursorrules").exists()

    def test_dry_run(self, temp_dir, skill_root):
        """Test that a dry run plans every step but writes nothing."""
        project = temp_dir / "project"

        result = setup_cursor(project, skill_root=skill_root, dry_run=True)

        assert result.success
        assert result.dry_run
        assert not project.exists()
        assert len(result.actions) == 4


def _completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> MagicMock:
    return MagicMock(returncode=returncode, stdout=stdout, stderr=stderr)


class TestInitProject:
    """Test Anchor project bootstrap."""

    def test_check_prerequisites_all_present(self):
        """Test that no error is returned when every tool exists."""
        with patch("solana_wingman.project.anchor.shutil.which", return_value="/usr/bin/tool"):
            assert check_prerequisites() is None

    def test_check_prerequisites_reports_first_missing(self):
        """Test that the install hint names the missing tool."""
        def which(cmd):
            return None if cmd == "anchor" else f"/usr/bin/{cmd}"

        with patch("solana_wingman.project.anchor.shutil.which", side_effect=which):
            error = check_prerequisites()

        assert error.startswith("Anchor not installed.")
        assert "anchor-cli" in error

    def test_full_bootstrap(self, temp_dir):
        """Test the post-init steps against a simulated anchor init."""
        def fake_run(cmd, cwd=None, **kwargs):
            if cmd[:2] == ["anchor", "init"]:
                program = Path(cwd) / cmd[2] / "programs" / cmd[2]
                program.mkdir(parents=True)
                (program / "Cargo.toml").write_text("[package]\nname = \"demo\"\n")
                (Path(cwd) / cmd[2] / ".gitignore").write_text("node_modules/\n")
            return _completed()

        with patch("solana_wingman.project.anchor.shutil.which", return_value="/usr/bin/tool"), \
                patch("solana_wingman.project.anchor.subprocess.run", side_effect=fake_run) as mock_run:
            result = init_project("demo", parent_dir=temp_dir)

        project = temp_dir / "demo"
        assert result.success, result.error
        assert mock_run.call_count == 2
        assert mock_run.call_args_list[1].args[0] == ["solana", "config", "set", "--url", "localhost"]
        assert CARGO_DEPENDENCIES in (project / "programs" / "demo" / "Cargo.toml").read_text()
        assert (project / "tests" / "fixtures").is_dir()
        assert (project / "docs").is_dir()
        dev_script = project / "scripts" / "dev.sh"
        assert dev_script.read_text().startswith("#!/bin/bash")
        assert dev_script.stat().st_mode & 0o111
        gitignore = (project / ".gitignore").read_text()
        assert gitignore.startswith("node_modules/\n")
        assert "test-ledger/" in gitignore
        assert result.next_steps[0] == "cd demo"

    def test_anchor_init_failure_stops(self, temp_dir):
        """Test that a failing command stops the bootstrap."""
        with patch("solana_wingman.project.anchor.shutil.which", return_value="/usr/bin/tool"), \
                patch(
                    "solana_wingman.project.anchor.subprocess.run",
                    return_value=_completed(returncode=1, stderr="workspace exists"),
                ) as mock_run:
            result = init_project("demo", parent_dir=temp_dir)

        assert not result.success
        assert result.error == "Create Anchor project failed: workspace exists"
        assert mock_run.call_count == 1
        assert not (temp_dir / "demo" / "scripts").exists()

    def test_command_timeout(self, temp_dir):
        """Test that a timed-out command is reported."""
        with patch("solana_wingman.project.anchor.shutil.which", return_value="/usr/bin/tool"), \
                patch(
                    "solana_wingman.project.anchor.subprocess.run",
                    side_effect=subprocess.TimeoutExpired(cmd="anchor init demo", timeout=600),
                ):
            result = init_project("demo", parent_dir=temp_dir)

        assert not result.success
        assert "timed out" in result.error

    def test_missing_tool_runs_nothing(self, temp_dir):
        """Test that prerequisites are checked before any command."""
        with patch("solana_wingman.project.anchor.shutil.which", return_value=None), \
                patch("solana_wingman.project.anchor.subprocess.run") as mock_run:
            result = init_project("demo", parent_dir=temp_dir)

        assert not result.success
        assert "Solana CLI not installed" in result.error
        mock_run.assert_not_called()
