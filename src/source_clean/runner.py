"""Script runner with verbosity control and failure notification.

Executes a Python script into a caller-owned namespace. The verbosity mode
decides whether source is echoed and whether the script's stdout, stderr,
warnings and plots reach the console.

Copyright 2025 Ben Mensi
Licensed under the Apache License, Version 2.0
"""

import __future__
import ast
import io
import logging
import os
import sys
import tokenize
import uuid
import warnings
from contextlib import ExitStack, redirect_stderr, redirect_stdout
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO, Tuple, Union

from source_clean.errors import NotFoundError
from source_clean.event_log import EventLog
from source_clean.graphics import null_graphics
from source_clean.modes import ModePolicy, VerbosityMode
from source_clean.notify import Notifier, Tone, resolve_notification, safe_play

logger = logging.getLogger(__name__)

ScriptReference = Union[str, os.PathLike]

FUTURE_FLAGS = 0
for _feature in __future__.all_feature_names:
    FUTURE_FLAGS |= getattr(__future__, _feature).compiler_flag


class RunState(Enum):
    """Lifecycle of a single run_script call."""

    PENDING = "pending"
    VALIDATING = "validating"
    EXECUTING = "executing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class ExecutionResult:
    """Outcome of running one script.

    ``scope`` is the namespace the script ran in; definitions made by the
    script are visible there. ``captured_output`` holds whatever the mode
    kept off the console.
    """

    script: Path
    mode: VerbosityMode
    status: RunState
    scope: Dict[str, Any] = field(default_factory=dict)
    captured_output: str = ""
    duration_ms: int = 0
    error: Optional[BaseException] = None

    @property
    def display_name(self) -> str:
        return display_name(self.script)

    @property
    def succeeded(self) -> bool:
        return self.status == RunState.SUCCEEDED


def display_name(script: ScriptReference) -> str:
    """Short name shown in banners: the base name, never the full path."""
    return Path(script).name


def resolve_script(script: ScriptReference) -> Path:
    """Resolve a script reference to a readable file.

    Raises:
        NotFoundError: If the file does not exist or cannot be read.
    """
    path = Path(script).expanduser()
    if not path.is_file():
        raise NotFoundError(f"File not found: {script}")
    if not os.access(path, os.R_OK):
        raise NotFoundError(f"File not readable: {script}")
    return path


def _statement_chunks(source: str, filename: str) -> List[Tuple[str, Any]]:
    """Split source into (text, code) pairs, one per top-level statement."""
    tree = ast.parse(source, filename=filename)
    # Same syntax checks as a whole-file run
    compile(tree, filename, "exec", dont_inherit=True)
    lines = source.splitlines()
    chunks = []
    flags = 0
    for node in tree.body:
        # Decorators sit above the def/class line
        start = min([node.lineno] + [d.lineno for d in getattr(node, "decorator_list", [])])
        text = "\n".join(lines[start - 1 : node.end_lineno])
        module = ast.Module(body=[node], type_ignores=[])
        code = compile(module, filename, "exec", flags=flags, dont_inherit=True)
        # __future__ imports carry over to the statements after them
        flags |= code.co_flags & FUTURE_FLAGS
        chunks.append((text, code))
    return chunks


def _echo(console: TextIO, text: str) -> None:
    """Write a statement to the console, R-console style."""
    first, *rest = text.splitlines() or [""]
    console.write(f"> {first}\n")
    for line in rest:
        console.write(f"+ {line}\n")
    console.flush()


def _execute(
    path: Path,
    scope: Dict[str, Any],
    policy: ModePolicy,
    console: TextIO,
    capture: io.StringIO,
) -> None:
    # Honours PEP 263 coding declarations and BOMs
    with tokenize.open(path) as f:
        source = f.read()
    filename = str(path)

    with ExitStack() as stack:
        if not policy.show_output:
            stack.enter_context(redirect_stdout(capture))
        if not policy.show_messages:
            stack.enter_context(redirect_stderr(capture))
            stack.enter_context(warnings.catch_warnings())
            warnings.simplefilter("ignore")
        if not policy.show_graphics:
            stack.enter_context(null_graphics())

        if policy.echo_source:
            for text, code in _statement_chunks(source, filename):
                _echo(console, text)
                exec(code, scope)
        else:
            exec(compile(source, filename, "exec", dont_inherit=True), scope)


def run_script(
    script: ScriptReference,
    mode: Union[VerbosityMode, str] = VerbosityMode.MINIMAL,
    notify_on_success: bool = False,
    notify_on_error: bool = False,
    scope: Optional[Dict[str, Any]] = None,
    notifier: Optional[Notifier] = None,
    console: Optional[TextIO] = None,
    event_log: Optional[EventLog] = None,
    capture: Optional[io.StringIO] = None,
) -> ExecutionResult:
    """Run a script into a shared namespace.

    Args:
        script: Path to the Python script.
        mode: Verbosity mode name or VerbosityMode.
        notify_on_success: Play the completion tone after the run finishes.
        notify_on_error: Play the alarm tone if the script raises.
        scope: Namespace to execute into. Created if omitted. Anything the
            script defines is left here for the caller.
        notifier: Notification backend. Detected when a flag is set.
        console: Stream for banners and echoed source. Defaults to sys.stdout.
        event_log: Optional JSONL event log.
        capture: Buffer for output the mode keeps off the console. Created
            if omitted. Holds partial output when the script fails.

    Returns:
        ExecutionResult with status SUCCEEDED.

    Raises:
        InvalidModeError: If mode is not a defined verbosity mode.
        NotFoundError: If the script does not resolve to a readable file.
        BaseException: Whatever the script raised, re-raised unchanged,
            including SystemExit and KeyboardInterrupt.
    """
    state = RunState.PENDING
    logger.debug(f"{script}: {state.value}")

    state = RunState.VALIDATING
    logger.debug(f"{script}: {state.value}")
    mode = VerbosityMode.parse(mode)
    path = resolve_script(script)
    notifier, notify_on_success, notify_on_error = resolve_notification(
        notify_on_success, notify_on_error, notifier
    )

    if scope is None:
        scope = {}
    scope.setdefault("__name__", "__main__")
    scope["__file__"] = str(path)

    console = console if console is not None else sys.stdout
    policy = mode.policy
    name = display_name(path)
    if capture is None:
        capture = io.StringIO()
    run_id = str(uuid.uuid4())

    if event_log:
        event_log.emit("script.started", run_id, str(path), mode.value)

    state = RunState.EXECUTING
    logger.info(f"Running {name} ({mode.value})")
    start_time = datetime.now(timezone.utc)

    console.write(policy.banner_open.format(name=name))
    console.flush()
    try:
        _execute(path, scope, policy, console, capture)
    except BaseException as e:
        state = RunState.FAILED
        duration_ms = int((datetime.now(timezone.utc) - start_time).total_seconds() * 1000)
        logger.info(f"{name} failed after {duration_ms} ms: {type(e).__name__}: {e}")
        if event_log:
            event_log.emit(
                "script.failed",
                run_id,
                str(path),
                mode.value,
                details={"duration_ms": duration_ms},
                error_message=f"{type(e).__name__}: {e}",
            )
        if notify_on_error:
            safe_play(notifier, Tone.ALARM)
        raise

    if policy.banner_close:
        console.write(policy.banner_close)
        console.flush()

    state = RunState.SUCCEEDED
    duration_ms = int((datetime.now(timezone.utc) - start_time).total_seconds() * 1000)
    logger.info(f"{name} completed in {duration_ms} ms")
    if event_log:
        event_log.emit(
            "script.completed",
            run_id,
            str(path),
            mode.value,
            details={"duration_ms": duration_ms},
        )

    if notify_on_success:
        safe_play(notifier, Tone.SUCCESS)

    return ExecutionResult(
        script=path,
        mode=mode,
        status=state,
        scope=scope,
        captured_output=capture.getvalue(),
        duration_ms=duration_ms,
    )
