"""
Built-in generation tables.

These are the stock targets and naming patches used when codegen.yml
does not override them. Each call returns fresh model instances.

Usage::

    from protogen.core.data import default_targets, default_naming_patches
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from protogen.core.models.target import GenerationTarget, PatchRule


# (include root, packages, output root, namespace label)
GENERATION_TARGETS: tuple[tuple[str, tuple[str, ...], str, str], ...] = (
    ("grpc-sys/grpc/src/proto", ("grpc/health/v1",), "health/src/proto", ""),
    ("proto/proto", ("grpc/testing",), "proto/src/proto", "testing"),
    ("proto/proto", ("grpc/example",), "proto/src/proto", "example"),
    ("proto/proto", ("google/rpc",), "proto/src/proto", "google/rpc"),
)

# (generated file, [(old, new), ...]); order within a file is significant.
NAMING_PATCHES: tuple[tuple[str, tuple[tuple[str, str], ...]], ...] = (
    (
        "health/src/proto/protobuf/health.rs",
        (
            ("HealthCheckResponse_ServingStatus", "ServingStatus"),
            # Longer variants first; SERVING is a substring of the others.
            ("NOT_SERVING", "NotServing"),
            ("SERVICE_UNKNOWN", "ServiceUnknown"),
            ("UNKNOWN", "Unknown"),
            ("SERVING", "Serving"),
            ("rustfmt_skip", "rustfmt::skip"),
        ),
    ),
)

# Third-party submodules initialised under grpc-sys/grpc/third_party.
GRPC_THIRD_PARTY_SUBMODULES: tuple[str, ...] = ("cares/cares", "abseil-cpp", "re2")


def default_targets() -> list[GenerationTarget]:
    from protogen.core.models.target import GenerationTarget

    return [
        GenerationTarget(
            include_root=include,
            packages=list(packages),
            output_root=output_root,
            namespace_label=label,
        )
        for include, packages, output_root, label in GENERATION_TARGETS
    ]


def default_naming_patches() -> list[PatchRule]:
    from protogen.core.models.target import PatchRule, Substitution

    return [
        PatchRule(
            target_file=path,
            substitutions=[Substitution(old=old, new=new) for old, new in fixes],
        )
        for path, fixes in NAMING_PATCHES
    ]
