"""Audible notification when a script finishes or fails.

Notification is optional. When no backend is usable the runner warns and
carries on without it.

Copyright 2025 Ben Mensi
Licensed under the Apache License, Version 2.0
"""

import logging
import sys
import time
import warnings
from enum import Enum
from typing import Optional, Protocol, TextIO, Tuple


logger = logging.getLogger(__name__)


class NotificationUnavailableWarning(UserWarning):
    """Emitted when notification was requested but no backend can play it."""

    pass


class Tone(Enum):
    """Distinct tones for completion and failure."""

    SUCCESS = "success"
    ALARM = "alarm"


class Notifier(Protocol):
    def available(self) -> bool:
        ...

    def play(self, tone: Tone) -> None:
        ...


class NullNotifier:
    """Backend used when nothing else is available."""

    def available(self) -> bool:
        return False

    def play(self, tone: Tone) -> None:
        logger.debug(f"No notification backend, dropping {tone.value} tone")


class TerminalBellNotifier:
    """Rings the terminal bell: once for success, three times for an alarm."""

    RINGS = {Tone.SUCCESS: 1, Tone.ALARM: 3}

    def __init__(self, stream: Optional[TextIO] = None, interval: float = 0.2):
        self._stream = stream
        self.interval = interval

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def available(self) -> bool:
        isatty = getattr(self.stream, "isatty", None)
        return bool(isatty and isatty())

    def play(self, tone: Tone) -> None:
        rings = self.RINGS[tone]
        for i in range(rings):
            self.stream.write("\a")
            self.stream.flush()
            if i < rings - 1:
                time.sleep(self.interval)


class WinsoundNotifier:
    """Plays tones through winsound on Windows."""

    # (frequency Hz, duration ms, repeats)
    TONES = {Tone.SUCCESS: (880, 200, 1), Tone.ALARM: (440, 350, 3)}

    def available(self) -> bool:
        return sys.platform == "win32"

    def play(self, tone: Tone) -> None:
        import winsound

        frequency, duration_ms, repeats = self.TONES[tone]
        for _ in range(repeats):
            winsound.Beep(frequency, duration_ms)


def detect_notifier() -> Notifier:
    """Pick the first usable backend, falling back to NullNotifier."""
    for candidate in (WinsoundNotifier(), TerminalBellNotifier()):
        if candidate.available():
            logger.debug(f"Using notification backend {type(candidate).__name__}")
            return candidate
    return NullNotifier()


def resolve_notification(
    notify_on_success: bool,
    notify_on_error: bool,
    notifier: Optional[Notifier] = None,
) -> Tuple[Notifier, bool, bool]:
    """Settle which notifications a run will attempt.

    If either flag is set and the backend is unavailable, a
    NotificationUnavailableWarning is emitted and both flags are turned off.

    Returns:
        Tuple of (notifier, notify_on_success, notify_on_error).
    """
    if not (notify_on_success or notify_on_error):
        return notifier or NullNotifier(), False, False

    if notifier is None:
        notifier = detect_notifier()

    if not notifier.available():
        message = "No notification backend available. Notification will not sound."
        logger.warning(message)
        warnings.warn(message, NotificationUnavailableWarning, stacklevel=3)
        return notifier, False, False

    return notifier, notify_on_success, notify_on_error


def safe_play(notifier: Notifier, tone: Tone) -> bool:
    """Play a tone, never raising.

    Returns:
        True if the backend played without error.
    """
    try:
        notifier.play(tone)
    except Exception:
        logger.debug(f"Failed to play {tone.value} tone", exc_info=True)
        return False
    return True
