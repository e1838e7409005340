"""
Toolchain model — how the external compilers and builders are invoked.

Every command here is an argv list, never a shell string. Paths are
relative to the project root unless absolute.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class PrimaryCodec(BaseModel):
    """Message codec plus the separately built service stub plugin."""

    output_dir: str = "protobuf"
    message_out_flag: str = "--rust_out"
    stub_out_flag: str = "--grpc_out"
    plugin_name: str = "protoc-gen-grpc"
    plugin_path: str = "./target/debug/grpc_rust_plugin"
    plugin_build: list[str] = Field(
        default_factory=lambda: ["build", "-p", "grpcio-compiler"]
    )


class AlternateCodec(BaseModel):
    """Self-contained generator emitting merged message + service code."""

    output_dir: str = "prost"
    build: list[str] = Field(
        default_factory=lambda: [
            "build",
            "--no-default-features",
            "--features",
            "prost-codec",
            "--bin",
            "grpc_rust_prost",
        ]
    )
    build_cwd: str = "compiler"
    binary: str = "target/debug/grpc_rust_prost"
    compiler_env_var: str = "PROTOC"


class Toolchain(BaseModel):
    """External tools used by the generation pipeline.

    ``protoc`` and ``cargo`` are optional here: when unset they are
    resolved from the environment (``$PROTOC`` / ``$CARGO``) and then
    from ``PATH`` at run time.
    """

    protoc: str | None = None
    cargo: str | None = None

    schema_suffix: str = ".proto"
    generated_suffix: str = ".rs"
    stub_suffix: str = Field(default="_grpc", min_length=1)
    version_check_marker: str = Field(default="::protobuf::VERSION", min_length=1)

    primary: PrimaryCodec = Field(default_factory=PrimaryCodec)
    alternate: AlternateCodec = Field(default_factory=AlternateCodec)
    formatter: list[str] = Field(default_factory=lambda: ["fmt", "--all"])
