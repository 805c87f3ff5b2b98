"""Schema loading utility."""

import json
from pathlib import Path

_DECISION_SCHEMA_PATH = Path(__file__).resolve().parent.parent / "holdem" / "schema.json"


def load_schema(path: Path) -> dict:
    """Load a JSON Schema file and return as dict."""
    with open(path) as f:
        return json.load(f)


def decision_schema() -> dict:
    """Schema every structured seat decision must satisfy."""
    return load_schema(_DECISION_SCHEMA_PATH)
