"""Verbosity modes and the output policy each one maps to.

Copyright 2025 Ben Mensi
Licensed under the Apache License, Version 2.0
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from source_clean.errors import InvalidModeError


class VerbosityMode(Enum):
    """How much of a script run reaches the console.

    debug: code, output and messages, with a start/end banner
    full: output and messages, "Loading: ... Done." banner
    minimal: output only, warnings and stderr suppressed
    silent: nothing from the script, graphics sent to a null sink
    code_only: code echoed, output suppressed
    """

    DEBUG = "debug"
    FULL = "full"
    MINIMAL = "minimal"
    SILENT = "silent"
    CODE_ONLY = "code_only"

    @classmethod
    def parse(cls, value: Union["VerbosityMode", str]) -> "VerbosityMode":
        """Resolve a mode name to a VerbosityMode.

        Raises:
            InvalidModeError: If value is not one of the defined modes.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                pass
        raise InvalidModeError(
            f"mode must be one of: {', '.join(valid_modes())}, got: {value!r}"
        )

    @property
    def policy(self) -> "ModePolicy":
        return _POLICIES[self]


@dataclass(frozen=True)
class ModePolicy:
    """Independent output switches for a run.

    Banner fields hold format strings taking ``name``. An empty closing
    banner means nothing is written on completion.
    """

    echo_source: bool
    show_output: bool
    show_messages: bool
    show_graphics: bool
    banner_open: str
    banner_close: Optional[str] = None


_POLICIES = {
    VerbosityMode.DEBUG: ModePolicy(
        echo_source=True,
        show_output=True,
        show_messages=True,
        show_graphics=True,
        banner_open="\n=== SOURCING: {name} ===\n",
        banner_close="=== COMPLETE ===\n\n",
    ),
    VerbosityMode.FULL: ModePolicy(
        echo_source=False,
        show_output=True,
        show_messages=True,
        show_graphics=True,
        banner_open="Loading: {name} ...",
        banner_close=" Done.\n",
    ),
    VerbosityMode.MINIMAL: ModePolicy(
        echo_source=False,
        show_output=True,
        show_messages=False,
        show_graphics=True,
        banner_open="\n--- {name} ---\n",
        banner_close="--- COMPLETE ---\n",
    ),
    VerbosityMode.SILENT: ModePolicy(
        echo_source=False,
        show_output=False,
        show_messages=False,
        show_graphics=False,
        banner_open="\n--- {name} ---\n",
        banner_close="--- COMPLETE ---\n",
    ),
    # Only stdout is captured; warnings and plots behave as in full.
    VerbosityMode.CODE_ONLY: ModePolicy(
        echo_source=True,
        show_output=False,
        show_messages=True,
        show_graphics=True,
        banner_open="\n>>> Code from: {name}\n",
    ),
}


def valid_modes() -> list:
    """Mode names in declaration order."""
    return [mode.value for mode in VerbosityMode]
