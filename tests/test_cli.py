"""Tests for the source-clean CLI."""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from source_clean import __version__
from source_clean.cli import app


runner = CliRunner()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run each CLI test from a clean directory with no user config."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("SOURCE_CLEAN_CONFIG", raising=False)
    monkeypatch.delenv("SOURCE_CLEAN_MODE", raising=False)
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return work


class TestRunCommand:
    """Tests for source-clean run."""

    def test_run_minimal(self, workdir):
        (workdir / "hello.py").write_text("print('hello output')\n")

        result = runner.invoke(app, ["run", "hello.py"])

        assert result.exit_code == 0
        assert "--- hello.py ---" in result.output
        assert "hello output" in result.output

    def test_run_silent(self, workdir):
        (workdir / "hello.py").write_text("print('hello output')\n")

        result = runner.invoke(app, ["run", "hello.py", "--mode", "silent"])

        assert result.exit_code == 0
        assert "--- hello.py ---" in result.output
        assert "hello output" not in result.output

    def test_mode_from_config(self, workdir):
        (workdir / "hello.py").write_text("x = 1\n")
        (workdir / "source-clean.yaml").write_text("mode: full\n")

        result = runner.invoke(app, ["run", "hello.py"])

        assert result.exit_code == 0
        assert "Loading: hello.py ... Done." in result.output

    def test_scripts_dir_from_config(self, workdir):
        (workdir / "02_scripts").mkdir()
        (workdir / "02_scripts" / "hello.py").write_text("x = 1\n")
        (workdir / "source-clean.yaml").write_text("scripts_dir: 02_scripts\n")

        result = runner.invoke(app, ["run", "hello.py"])

        assert result.exit_code == 0

    def test_invalid_mode(self, workdir):
        (workdir / "hello.py").write_text("x = 1\n")

        result = runner.invoke(app, ["run", "hello.py", "--mode", "loud"])

        assert result.exit_code == 1
        assert "mode must be one of" in result.output

    def test_missing_script(self, workdir):
        result = runner.invoke(app, ["run", "missing.py"])

        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_failing_script(self, workdir):
        (workdir / "fail.py").write_text("raise ValueError('boom')\n")

        result = runner.invoke(app, ["run", "fail.py"])

        assert result.exit_code == 1
        assert "Script failed: ValueError: boom" in result.output

    def test_bad_config(self, workdir):
        (workdir / "hello.py").write_text("x = 1\n")

        result = runner.invoke(app, ["run", "hello.py", "--config", "nope.yaml"])

        assert result.exit_code == 1
        assert "Config error" in result.output

    def test_events_log(self, workdir):
        (workdir / "hello.py").write_text("x = 1\n")
        (workdir / "source-clean.yaml").write_text("events_log: logs/events.jsonl\n")

        result = runner.invoke(app, ["run", "hello.py"])

        assert result.exit_code == 0
        assert (workdir / "logs" / "events.jsonl").exists()


class TestPipelineCommand:
    """Tests for source-clean pipeline."""

    def test_configured_scripts(self, workdir):
        (workdir / "a.py").write_text("shared = 'from a'\n")
        (workdir / "b.py").write_text("print(shared)\n")
        (workdir / "source-clean.yaml").write_text("scripts:\n  - a.py\n  - b.py\n")

        result = runner.invoke(app, ["pipeline"])

        assert result.exit_code == 0
        assert "from a" in result.output
        assert result.output.index("--- a.py ---") < result.output.index("--- b.py ---")

    def test_explicit_scripts(self, workdir):
        (workdir / "a.py").write_text("x = 1\n")
        (workdir / "b.py").write_text("y = x + 1\n")

        result = runner.invoke(app, ["pipeline", "a.py", "b.py", "--mode", "silent"])

        assert result.exit_code == 0

    def test_nothing_to_run(self, workdir):
        result = runner.invoke(app, ["pipeline"])

        assert result.exit_code == 1
        assert "No scripts" in result.output

    def test_failure_names_script(self, workdir):
        (workdir / "a.py").write_text("x = 1\n")
        (workdir / "b.py").write_text("y = missing_name\n")

        result = runner.invoke(app, ["pipeline", "a.py", "b.py"])

        assert result.exit_code == 1
        assert "Pipeline failed at b.py: NameError" in result.output


class TestOtherCommands:
    def test_modes(self, workdir):
        result = runner.invoke(app, ["modes"])

        assert result.exit_code == 0
        for name in ["debug", "full", "minimal", "silent", "code_only"]:
            assert name in result.output
        assert "silent     code=hidden output=hidden" in result.output

    def test_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_config_validate_defaults(self, workdir):
        result = runner.invoke(app, ["config", "validate"])

        assert result.exit_code == 0
        assert "Mode: minimal" in result.output
        assert "Configuration validation complete!" in result.output

    def test_config_validate_missing_scripts(self, workdir):
        (workdir / "a.py").write_text("x = 1\n")
        (workdir / "source-clean.yaml").write_text("scripts:\n  - a.py\n  - gone.py\n")

        result = runner.invoke(app, ["config", "validate"])

        assert result.exit_code == 1
        assert "gone.py [missing]" in result.output
        assert "1 script(s) not found" in result.output

    def test_config_validate_bad_mode(self, workdir):
        (workdir / "source-clean.yaml").write_text("mode: loud\n")

        result = runner.invoke(app, ["config", "validate"])

        assert result.exit_code == 1
        assert "Validation failed" in result.output
