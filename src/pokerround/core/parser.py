"""DecisionParser — extract and validate seat decisions from free text.

Finds the last valid JSON object in raw text and validates it against the
decision schema (``holdem/schema.json``).

Uses last-wins semantics: a presentation side that corrects itself
mid-message (a second JSON object after the first) gets its final answer
used, not its first draft.
"""

import json
import re
from dataclasses import dataclass

import jsonschema

from pokerround.core.schemas import decision_schema

# Regex to find JSON objects in text; matches outermost { ... }
_JSON_OBJECT_RE = re.compile(r"\{[^{}]*(?:\{[^{}]*\}[^{}]*)*\}")


@dataclass(frozen=True)
class ParseResult:
    """Result of parsing a raw decision."""

    success: bool
    action: dict | None
    raw_json: str | None
    error: str | None


class DecisionParser:
    """Extract last valid JSON object from text and validate against schema."""

    def __init__(self, schema: dict | None = None):
        self._schema = schema if schema is not None else decision_schema()

    @property
    def schema(self) -> dict:
        return self._schema

    def validate(self, data: dict) -> str | None:
        """Return a validation message for ``data``, or None if it conforms."""
        try:
            jsonschema.validate(data, self._schema)
        except jsonschema.ValidationError as e:
            return e.message
        return None

    def parse(self, raw_text: str) -> ParseResult:
        candidates = _JSON_OBJECT_RE.findall(raw_text)

        if not candidates:
            return ParseResult(
                success=False,
                action=None,
                raw_json=None,
                error="No JSON object found in input",
            )

        last_error = None
        best = None  # last valid (action, raw_json) pair

        for candidate in candidates:
            try:
                parsed = json.loads(candidate)
            except json.JSONDecodeError as e:
                last_error = f"JSON parse error: {e}"
                continue

            if not isinstance(parsed, dict):
                last_error = "JSON value is not an object"
                continue

            problem = self.validate(parsed)
            if problem is not None:
                last_error = f"Schema validation: {problem}"
                continue

            best = (parsed, candidate)

        if best:
            return ParseResult(
                success=True,
                action=best[0],
                raw_json=best[1],
                error=None,
            )

        return ParseResult(
            success=False,
            action=None,
            raw_json=candidates[0],
            error=last_error,
        )
