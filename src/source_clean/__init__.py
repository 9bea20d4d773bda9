# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""Run analysis scripts in a shared namespace with verbosity control.

Scripts are executed one at a time, synchronously, into a scope owned by
the caller. Output handling is driven by a VerbosityMode; failures are
re-raised after an optional alarm tone.
"""

from source_clean.errors import (
    ExecutionError,
    InvalidModeError,
    NotFoundError,
    SourceCleanError,
)
from source_clean.modes import ModePolicy, VerbosityMode
from source_clean.notify import NotificationUnavailableWarning, Tone
from source_clean.pipeline import run_pipeline
from source_clean.runner import ExecutionResult, RunState, run_script

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "run_script",
    "run_pipeline",
    "ExecutionResult",
    "RunState",
    "VerbosityMode",
    "ModePolicy",
    "Tone",
    "SourceCleanError",
    "InvalidModeError",
    "NotFoundError",
    "ExecutionError",
    "NotificationUnavailableWarning",
]
