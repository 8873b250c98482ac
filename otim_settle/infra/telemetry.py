from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any, Protocol


class EventSink(Protocol):
    def emit(self, event: str, **fields: Any) -> None: ...


class RuntimeEventLogger:
    """Append-only JSONL record of settlement runs. The directory is created on first write."""

    def __init__(self, data_dir: str, filename: str = "settlement_events.jsonl"):
        self.path = Path(data_dir) / filename

    def emit(self, event: str, **fields: Any) -> None:
        payload = {
            "ts": time.time(),
            "event": event,
            **fields,
        }
        row = json.dumps(payload, separators=(",", ":"), ensure_ascii=True, default=str)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as f:
            f.write(row + "\n")


class NullEventLogger:
    def emit(self, event: str, **fields: Any) -> None:
        return None
