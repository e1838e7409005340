"""
Domain models — Pydantic types for the generator.

All models are re-exported here for convenient access:

    from protogen.core.models import GenerationTarget, PatchRule, Action, Receipt
"""

from protogen.core.models.action import Action, Receipt
from protogen.core.models.config import CodegenConfig
from protogen.core.models.target import GenerationTarget, PatchRule, Substitution
from protogen.core.models.toolchain import AlternateCodec, PrimaryCodec, Toolchain

__all__ = [
    # action.py
    "Action",
    "AlternateCodec",
    # config.py
    "CodegenConfig",
    # target.py
    "GenerationTarget",
    "PatchRule",
    # toolchain.py
    "PrimaryCodec",
    "Receipt",
    "Substitution",
    "Toolchain",
]
