"""Shared fixtures for source-clean tests."""

import io
from pathlib import Path

import pytest

from source_clean.notify import Tone


class RecordingNotifier:
    """Notifier double that records tones and what the console held at the time."""

    def __init__(self, available=True, fail=False, console=None):
        self._available = available
        self.fail = fail
        self.console = console
        self.available_calls = 0
        self.tones = []
        self.console_at_play = []

    def available(self):
        self.available_calls += 1
        return self._available

    def play(self, tone: Tone):
        self.tones.append(tone)
        if self.console is not None:
            self.console_at_play.append(self.console.getvalue())
        if self.fail:
            raise RuntimeError("speaker unplugged")


@pytest.fixture
def write_script(tmp_path):
    """Write a script under tmp_path and return its path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write


@pytest.fixture
def console():
    return io.StringIO()


@pytest.fixture
def notifier_factory():
    return RecordingNotifier
