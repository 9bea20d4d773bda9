"""Run an ordered list of scripts into one shared namespace.

Copyright 2025 Ben Mensi
Licensed under the Apache License, Version 2.0
"""

import io
import logging
from typing import Any, Dict, List, Optional, Sequence, TextIO, Union

from source_clean.errors import ExecutionError
from source_clean.event_log import EventLog
from source_clean.modes import VerbosityMode
from source_clean.notify import Notifier, Tone, resolve_notification, safe_play
from source_clean.runner import (
    ExecutionResult,
    RunState,
    ScriptReference,
    resolve_script,
    run_script,
)

logger = logging.getLogger(__name__)


def run_pipeline(
    scripts: Sequence[ScriptReference],
    mode: Union[VerbosityMode, str] = VerbosityMode.MINIMAL,
    scope: Optional[Dict[str, Any]] = None,
    notify_on_success: bool = False,
    notify_on_error: bool = False,
    notifier: Optional[Notifier] = None,
    console: Optional[TextIO] = None,
    event_log: Optional[EventLog] = None,
) -> List[ExecutionResult]:
    """Run scripts in order, stopping at the first failure.

    Every reference is resolved before the first script runs. The success
    tone, if requested, sounds once after the last script.

    Returns:
        One ExecutionResult per script, in order.

    Raises:
        InvalidModeError: If mode is not a defined verbosity mode.
        NotFoundError: If any script does not resolve.
        ExecutionError: If a script raises; chained from the original error.
    """
    mode = VerbosityMode.parse(mode)
    paths = [resolve_script(script) for script in scripts]
    notifier, notify_on_success, notify_on_error = resolve_notification(
        notify_on_success, notify_on_error, notifier
    )

    if scope is None:
        scope = {}

    results = []
    for path in paths:
        capture = io.StringIO()
        try:
            result = run_script(
                path,
                mode=mode,
                notify_on_error=notify_on_error,
                scope=scope,
                notifier=notifier,
                console=console,
                event_log=event_log,
                capture=capture,
            )
        except Exception as e:
            logger.warning(
                f"Pipeline stopped at {path.name} "
                f"({len(results)} of {len(paths)} scripts completed)"
            )
            failed = ExecutionResult(
                script=path,
                mode=mode,
                status=RunState.FAILED,
                scope=scope,
                captured_output=capture.getvalue(),
                error=e,
            )
            raise ExecutionError(path, e, result=failed) from e
        results.append(result)

    logger.info(f"Pipeline completed: {len(results)} scripts")
    if notify_on_success:
        safe_play(notifier, Tone.SUCCESS)
    return results
