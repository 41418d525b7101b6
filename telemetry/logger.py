from __future__ import annotations

import json
import logging
import time
import uuid
from collections import Counter, deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Deque, Dict, Optional

_log = logging.getLogger("tides.telemetry")


@dataclass
class TelemetryLogger:
    """
    Island session telemetry, one JSON object per line.

    Rows are kept in a short in-memory tail whether or not a file is
    attached; init() adds the file. Write failures are logged at DEBUG and
    otherwise ignored.
    """

    path: Optional[Path] = None
    enabled: bool = True
    tail_size: int = 200
    session: str = field(default_factory=lambda: uuid.uuid4().hex[:8])
    counts: Counter = field(default_factory=Counter)
    tail: Deque[Dict[str, Any]] = field(default_factory=deque)
    _opened_at: float = field(default_factory=time.monotonic)

    def init(self, path: Path) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.log("session_start", file=str(self.path))

    def close(self) -> None:
        self.log("session_end", uptime_s=round(time.monotonic() - self._opened_at, 1))
        self.path = None

    def log(self, event: str, **fields: Any) -> None:
        if not self.enabled:
            return

        row: Dict[str, Any] = {
            "session": self.session,
            "wall": round(time.time(), 3),
            "event": event,
        }
        row.update(fields)

        self.counts[event] += 1
        self.tail.append(row)
        while len(self.tail) > self.tail_size:
            self.tail.popleft()

        if self.path is None:
            return
        try:
            with self.path.open("a", encoding="utf-8") as f:
                f.write(json.dumps(row, ensure_ascii=False, default=str) + "\n")
        except OSError as e:
            _log.debug("Telemetry row for %s dropped: %s", event, e)

    def last(self, event: str) -> Optional[Dict[str, Any]]:
        """Most recent row of an event type still in the tail."""
        for row in reversed(self.tail):
            if row["event"] == event:
                return row
        return None


# Shared sink; the simulation and save system log day rollovers, tides,
# saves and resets here.
telemetry = TelemetryLogger()
