"""
Error taxonomy for generation runs.

Every failure in the pipeline is fatal for the run. Core services raise
one of these; the CLI turns it into a message and a process exit code.
Nothing here is caught and retried.
"""

from __future__ import annotations

# Exit code used when a subprocess had no exit status of its own
# (killed by a signal, or could not be spawned at all).
SIGNAL_EXIT_CODE = 255

# Exit code for failures that are not a subprocess exit status.
EXIT_FAILURE = 1


class CodegenError(Exception):
    """Base class: a named pipeline step failed."""

    def __init__(self, step: str, message: str, exit_code: int = EXIT_FAILURE):
        super().__init__(f"{step}: {message}")
        self.step = step
        self.message = message
        self.exit_code = exit_code


class ToolNotFoundError(CodegenError):
    """A required external tool could not be located."""


class InputResolutionError(CodegenError):
    """A schema package directory is missing or unreadable."""


class OutputDirError(CodegenError):
    """An output directory could not be removed or created."""


class PatchTargetMissingError(CodegenError):
    """A naming patch names a generated file that does not exist."""


class MalformedOutputError(CodegenError):
    """Generated output does not have the expected shape."""


class StepFailedError(CodegenError):
    """An external compiler, builder or formatter did not succeed."""


class GeneratedFileError(CodegenError):
    """A generated file could not be read, decoded or written back."""
