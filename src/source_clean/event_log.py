# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""Append-only JSONL record of script runs."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class EventLog:
    """One JSON object per line: script.started, script.completed, script.failed."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def emit(
        self,
        event_type: str,
        run_id: str,
        script: str,
        mode: str,
        details: Optional[Dict[str, Any]] = None,
        error_message: Optional[str] = None,
    ) -> None:
        event = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "event_type": event_type,
            "run_id": run_id,
            "script": script,
            "mode": mode,
        }
        if details:
            event.update(details)
        if error_message:
            event["error_message"] = error_message

        with open(self.path, "a") as f:
            f.write(json.dumps(event) + "\n")

    def read(self) -> List[Dict[str, Any]]:
        """Load all recorded events, oldest first."""
        if not self.path.exists():
            return []
        with open(self.path) as f:
            return [json.loads(line) for line in f if line.strip()]
