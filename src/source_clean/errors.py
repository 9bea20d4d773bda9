"""Error taxonomy for script runs.

Validation errors are raised before anything executes. A script's own
failure is re-raised unchanged by run_script; ExecutionError is only used
by the pipeline to say which step stopped the sequence.

Copyright 2025 Ben Mensi
Licensed under the Apache License, Version 2.0
"""

from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from source_clean.runner import ExecutionResult


class SourceCleanError(Exception):
    """Base class for runner failures."""

    pass


class InvalidModeError(SourceCleanError, ValueError):
    """Raised when a verbosity mode is not one of the defined values."""

    pass


class NotFoundError(SourceCleanError, FileNotFoundError):
    """Raised when a script reference does not resolve to a readable file."""

    pass


class ExecutionError(SourceCleanError):
    """Raised when a script in a pipeline fails.

    The script's own exception is available as ``cause`` and is also
    chained as ``__cause__``.
    """

    def __init__(
        self,
        script: Path,
        cause: BaseException,
        result: Optional["ExecutionResult"] = None,
    ):
        self.script = script
        self.cause = cause
        self.result = result
        super().__init__(f"{script.name} failed: {type(cause).__name__}: {cause}")
