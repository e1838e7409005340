"""
Tests for CLI commands — codegen, targets, config check, tasks, and global options.
"""

import json
import textwrap
from pathlib import Path

import pytest
from click.testing import CliRunner

from protogen.adapters.mock import MockAdapter
from protogen.adapters.registry import AdapterRegistry
from protogen.main import cli


@pytest.fixture
def use_registry(monkeypatch, registry: AdapterRegistry) -> AdapterRegistry:
    """Route every command the CLI runs through the fake toolchain."""
    monkeypatch.setattr("protogen.core.use_cases.codegen.default_registry", lambda: registry)
    monkeypatch.setattr("protogen.core.use_cases.tasks.default_registry", lambda: registry)
    return registry


class TestCLIGlobal:
    """Tests for global CLI behavior."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "protogen" in result.output
        assert "codegen" in result.output
        assert "refresh-package" in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestCodegenCommand:
    """Tests for the codegen command."""

    def test_codegen(self, workspace: Path, use_registry):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(workspace), "codegen"])
        assert result.exit_code == 0, result.output
        assert "✓ health" in result.output
        assert "(3 schemas)" in result.output
        assert "Generated 4/4 targets" in result.output

    def test_codegen_single_target(self, workspace: Path, use_registry):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(workspace), "codegen", "-t", "example"])
        assert result.exit_code == 0
        assert "Generated 1/1 targets" in result.output

    def test_codegen_json(self, workspace: Path, use_registry):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(workspace), "codegen", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["targets_completed"] == 4

    def test_tool_exit_code_propagated(self, workspace: Path, use_registry, fake_tools: MockAdapter):
        fake_tools.set_program_failure("cargo", error="could not compile", return_code=101)
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(workspace), "codegen"])
        assert result.exit_code == 101
        assert "primary: build stub plugin" in result.output
        assert "could not compile" in result.output

    def test_unknown_target(self, workspace: Path, use_registry):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(workspace), "codegen", "-t", "nope"])
        assert result.exit_code == 1
        assert "nope" in result.output


class TestTargetsCommand:
    """Tests for the targets command."""

    def test_builtin_targets(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        runner = CliRunner()
        result = runner.invoke(cli, ["targets"])
        assert result.exit_code == 0
        assert "Targets: 4" in result.output
        assert "proto/src/proto/prost/google/rpc" in result.output
        assert "HealthCheckResponse_ServingStatus → ServingStatus" in result.output

    def test_targets_json(self, workspace: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(workspace), "targets", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [t["label"] for t in data["targets"]] == ["health", "testing", "example", "google/rpc"]
        assert data["targets"][0]["primary_dir"] == "health/src/proto/protobuf"
        assert data["naming_patches"][0]["target_file"] == "health/src/proto/protobuf/health.rs"

    def test_targets_bad_config(self, tmp_path: Path):
        config = tmp_path / "codegen.yml"
        config.write_text("targets: nope\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "targets"])
        assert result.exit_code == 1


class TestConfigCheckCommand:
    """Tests for the config check command."""

    def test_valid_config(self, workspace: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(workspace), "config", "check"])
        assert result.exit_code == 0
        assert "valid" in result.output.lower()
        assert "Targets: 4" in result.output

    def test_valid_config_json(self, workspace: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(workspace), "config", "check", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["valid"] is True

    def test_warnings_shown(self, tmp_path: Path):
        config = tmp_path / "codegen.yml"
        config.write_text("version: 1\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "config", "check"])
        assert result.exit_code == 0
        assert "Warnings" in result.output

    def test_errors_fail(self, tmp_path: Path):
        config = tmp_path / "codegen.yml"
        config.write_text(
            textwrap.dedent("""\
                toolchain:
                  primary:
                    output_dir: gen
                  alternate:
                    output_dir: gen
            """)
        )
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "config", "check"])
        assert result.exit_code == 1
        assert "Configuration errors" in result.output

    def test_missing_config(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--config", str(tmp_path / "missing.yml"), "config", "check", "--json"]
        )
        assert result.exit_code == 1
        assert json.loads(result.output)["valid"] is False


class TestTaskCommands:
    """Tests for the maintenance task commands."""

    def test_bindgen(self, workspace: Path, use_registry):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(workspace), "bindgen"])
        assert result.exit_code == 0
        assert "$ cargo build -p grpcio-sys --features _gen-bindings" in result.output
        assert "bindgen done" in result.output

    def test_task_failure(self, workspace: Path, use_registry, fake_tools: MockAdapter):
        fake_tools.set_program_failure("clang-tidy", return_code=4)
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(workspace), "clang-lint", "--json"])
        assert result.exit_code == 4
        data = json.loads(result.output)
        assert data["failed_step"] == "clang-tidy"
