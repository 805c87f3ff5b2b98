"""ActionLogger — JSONL action-stream logging.

One logger per table. Writes one JSONL line per action, in the order the
rounds produced them, plus a table summary as the final line. All entries
include schema version and table ID.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

import pokerround
from pokerround.holdem.actions import Action

logger = logging.getLogger(__name__)

_SCHEMA_VERSION = "1.0.0"


class ActionLogger:
    """Writes the JSONL action log for a single table."""

    def __init__(self, output_dir: Path, table_id: str, sink=None):
        self._output_dir = Path(output_dir)
        self._table_id = table_id
        self._output_dir.mkdir(parents=True, exist_ok=True)
        self._file_path = self._output_dir / f"{table_id}.jsonl"
        self._sink = sink
        self._seq = 0

    @property
    def file_path(self) -> Path:
        return self._file_path

    @property
    def table_id(self) -> str:
        return self._table_id

    def log_action(self, round_id: int, action: Action) -> None:
        record = action.to_dict()
        record["record_type"] = "action"
        record["schema_version"] = _SCHEMA_VERSION
        record["table_id"] = self._table_id
        record["round_id"] = round_id
        record["seq"] = self._seq
        record["timestamp"] = datetime.now(timezone.utc).isoformat()
        self._seq += 1
        self._append(record)
        self._forward("log_action", record)

    def finalize_table(
        self,
        stacks: list[int],
        busted: list[int],
        extra: dict | None = None,
    ) -> None:
        record = {
            "schema_version": _SCHEMA_VERSION,
            "record_type": "table_summary",
            "table_id": self._table_id,
            "final_stacks": list(stacks),
            "busted": list(busted),
            "actions_logged": self._seq,
            "engine_version": pokerround.__version__,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        if extra:
            record.update(extra)
        self._append(record)
        self._forward("finalize_table", record)

    def _forward(self, method: str, record: dict) -> None:
        if not self._sink:
            return
        try:
            getattr(self._sink, method)(self._table_id, record)
        except Exception:
            # sink errors never break JSONL
            logger.exception("Action sink failed on %s", method)

    def _append(self, record: dict) -> None:
        with open(self._file_path, "a") as f:
            f.write(json.dumps(record, default=str) + "\n")
