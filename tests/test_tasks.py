"""
Tests for workspace maintenance tasks.
"""

from pathlib import Path

import pytest

from protogen.adapters.mock import MockAdapter
from protogen.adapters.registry import AdapterRegistry
from protogen.core.use_cases.tasks import BORINGSSL_DIR, TASKS, run_task


@pytest.fixture
def adapter() -> MockAdapter:
    return MockAdapter()


@pytest.fixture
def task_registry(adapter: MockAdapter) -> AdapterRegistry:
    reg = AdapterRegistry()
    reg.register(adapter)
    return reg


class TestRunTask:
    def test_bindgen(self, workspace: Path, task_registry, adapter: MockAdapter):
        result = run_task("bindgen", config_path=workspace, registry=task_registry)
        assert result.ok
        assert adapter.argvs == [
            ["cargo", "build", "-p", "grpcio-sys", "--features", "_gen-bindings"]
        ]
        assert adapter.call_log[0].action.cwd == "grpc-sys"

    def test_submodule(self, workspace: Path, task_registry, adapter: MockAdapter):
        result = run_task("submodule", config_path=workspace, registry=task_registry)
        assert result.ok
        assert adapter.argvs == [
            ["git", "submodule", "update", "--init", "grpc-sys/grpc"],
            ["git", "submodule", "update", "--init", "cares/cares"],
            ["git", "submodule", "update", "--init", "abseil-cpp"],
            ["git", "submodule", "update", "--init", "re2"],
            ["git", "clean", "-df"],
            ["git", "reset", "--hard"],
        ]
        assert result.commands[0] == "git submodule update --init grpc-sys/grpc"

    def test_submodule_clears_boringssl(self, workspace: Path, task_registry):
        boringssl = workspace.parent / BORINGSSL_DIR
        (boringssl / "src").mkdir(parents=True)
        (boringssl / "BUILD").write_text("x")
        run_task("submodule", config_path=workspace, registry=task_registry)
        assert boringssl.is_dir()
        assert list(boringssl.iterdir()) == []

    def test_clang_lint(self, workspace: Path, task_registry, adapter: MockAdapter):
        assert run_task("clang-lint", config_path=workspace, registry=task_registry).ok
        assert [argv[0] for argv in adapter.argvs] == ["clang-tidy", "clang-format"]
        assert adapter.argvs[1] == ["clang-format", "-i", "grpc-sys/grpc_wrap.cc"]

    def test_refresh_package(self, workspace: Path, task_registry, adapter: MockAdapter):
        assert run_task("refresh-package", config_path=workspace, registry=task_registry).ok
        assert adapter.argvs[0][-1] == "_list-package"
        assert adapter.argvs[1] == ["rustfmt", "grpc-sys/link-deps.rs"]

    def test_failure_stops_task(self, workspace: Path, task_registry, adapter: MockAdapter):
        adapter.set_program_failure("clang-tidy", error="warnings as errors", return_code=6)
        result = run_task("clang-lint", config_path=workspace, registry=task_registry)
        assert result.exit_code == 6
        assert result.failed_step == "clang-tidy"
        assert adapter.call_count == 1
        assert result.to_dict()["error"] == "warnings as errors"

    def test_unknown_task(self, task_registry):
        result = run_task("deploy", registry=task_registry)
        assert result.exit_code == 1
        assert "deploy" in result.error

    def test_task_names(self):
        assert TASKS == ("bindgen", "submodule", "clang-lint", "refresh-package")
