"""
Shared test fixtures and configuration.

``workspace`` builds a miniature checkout with the same layout as the
built-in generation targets; ``fake_tools`` is a MockAdapter whose side
effect writes the files protoc, the stub plugin and the alternate
generator would have produced, so the whole pipeline runs without any
real toolchain.
"""

import textwrap
from pathlib import Path

import pytest

from protogen.adapters.base import ExecutionContext
from protogen.adapters.mock import MockAdapter
from protogen.adapters.registry import AdapterRegistry

HEALTH_PROTO = textwrap.dedent("""\
    syntax = "proto3";
    package grpc.health.v1;

    message HealthCheckRequest {
      string service = 1;
    }

    message HealthCheckResponse {
      enum ServingStatus {
        UNKNOWN = 0;
        SERVING = 1;
        NOT_SERVING = 2;
        SERVICE_UNKNOWN = 3;
      }
      ServingStatus status = 1;
    }

    service Health {
      rpc Check(HealthCheckRequest) returns (HealthCheckResponse);
    }
""")

SCHEMAS = {
    "grpc-sys/grpc/src/proto/grpc/health/v1/health.proto": HEALTH_PROTO,
    "proto/proto/grpc/testing/messages.proto": "message SimpleRequest {}\n",
    "proto/proto/grpc/testing/empty.proto": "message Empty {}\n",
    "proto/proto/grpc/testing/test.proto": "service TestService {}\n",
    "proto/proto/grpc/example/route_guide.proto": "service RouteGuide {}\n",
    "proto/proto/grpc/example/helloworld.proto": "service Greeter {}\n",
    "proto/proto/google/rpc/status.proto": "message Status {}\n",
    "proto/proto/google/rpc/code.proto": "enum Code { OK = 0; }\n",
}

CONFIG_YML = textwrap.dedent("""\
    version: 1
    toolchain:
      protoc: protoc
      cargo: cargo
""")


def _flag(argv: list[str], name: str) -> str | None:
    prefix = f"{name}="
    for arg in argv:
        if arg.startswith(prefix):
            return arg[len(prefix):]
    return None


def render_message_file(source: str, schema: str, inputs: list[str]) -> str:
    """What the fake compiler writes for one schema file."""
    body = "\n".join(f"// {line}" for line in source.splitlines())
    enum_block = ""
    if "ServingStatus" in source:
        enum_block = textwrap.dedent("""\
            #![cfg_attr(rustfmt, rustfmt_skip)]
            pub enum HealthCheckResponse_ServingStatus {
                UNKNOWN = 0,
                SERVING = 1,
                NOT_SERVING = 2,
                SERVICE_UNKNOWN = 3,
            }
        """)
    return (
        f"// @generated from {schema}\n"
        f"// compiled with: {','.join(inputs)}\n"
        "const _PROTOBUF_VERSION_CHECK: () = ::protobuf::VERSION_2_28_1;\n"
        f"{enum_block}"
        f"{body}\n"
    )


def fake_toolchain(ctx: ExecutionContext) -> None:
    """Emulate the outputs of protoc, the stub plugin and the alternate generator."""
    root = Path(ctx.project_root)
    argv = ctx.action.argv
    program = Path(argv[0]).name

    if program == "protoc":
        inputs = [a for a in argv if a.endswith(".proto")]
        message_out = _flag(argv, "--rust_out")
        stub_out = _flag(argv, "--grpc_out")
        for schema in inputs:
            source = (root / schema).read_text()
            stem = Path(schema).stem
            if message_out:
                (root / message_out / f"{stem}.rs").write_text(
                    render_message_file(source, schema, inputs)
                )
            if stub_out and "service " in source:
                (root / stub_out / f"{stem}_grpc.rs").write_text(
                    f"// service stubs for {schema}\n"
                    "const _VERSION: &str = ::protobuf::VERSION;\n"
                    f"pub struct {stem.title()}Client;\n"
                )

    elif program == "grpc_rust_prost":
        out_dir = root / _flag(argv, "--out-dir")
        protos = _flag(argv, "--protos").split(",")
        for schema in protos:
            (out_dir / f"{Path(schema).stem}.rs").write_text(
                f"// prost output for {schema}\n// order: {','.join(protos)}\n"
            )


def write_workspace(root: Path) -> Path:
    for rel, content in SCHEMAS.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    # Non-schema files are ignored by input resolution.
    (root / "proto/proto/grpc/testing/README.md").write_text("docs\n")
    (root / "proto/proto/grpc/testing/nested").mkdir()
    (root / "compiler").mkdir()
    config = root / "codegen.yml"
    config.write_text(CONFIG_YML)
    return config


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """A checkout with schemas for every built-in target. Returns codegen.yml."""
    return write_workspace(tmp_path)


@pytest.fixture
def fake_tools() -> MockAdapter:
    """Mock shell adapter that writes generated files."""
    return MockAdapter(side_effect=fake_toolchain)


@pytest.fixture
def registry(fake_tools: MockAdapter) -> AdapterRegistry:
    """Registry routing every command to ``fake_tools``."""
    reg = AdapterRegistry()
    reg.register(fake_tools)
    return reg


def snapshot(root: Path, *dirs: str) -> dict[str, bytes]:
    """Every file under ``dirs`` (relative to root) mapped to its bytes."""
    files: dict[str, bytes] = {}
    for d in dirs:
        for path in sorted((root / d).rglob("*")):
            if path.is_file():
                files[str(path.relative_to(root))] = path.read_bytes()
    return files
