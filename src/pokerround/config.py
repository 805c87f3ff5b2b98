"""Table configuration loader."""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from pokerround.holdem.errors import ConfigError
from pokerround.holdem.state import MAX_SEATS

SEAT_KINDS = ("calling", "random", "scripted")

OUTPUT_DIR_ENV = "POKERROUND_OUTPUT_DIR"


@dataclass
class SeatConfig:
    name: str
    kind: str = "calling"  # "calling", "random", "scripted"
    script: list[dict] = field(default_factory=list)  # scripted seats only


@dataclass
class TableConfig:
    name: str
    seed: int
    stack_size: int = 1000
    blind_size: int = 5
    rounds: int = 1
    blind_schedule: dict[int, int] = field(default_factory=dict)  # {round_id: small_blind}
    seats: list[SeatConfig] = field(default_factory=list)
    output_dir: Path | None = None


def _positive_int(value, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"{what} must be a positive integer, got {value!r}")
    return value


def load_config(path: Path) -> TableConfig:
    """Load table config from YAML file."""
    with open(path) as f:
        raw = yaml.safe_load(f)

    if not isinstance(raw, dict) or "table" not in raw:
        raise ConfigError(f"{path}: missing 'table' section")

    t = raw["table"]
    if not isinstance(t, dict):
        raise ConfigError(f"{path}: 'table' must be a mapping, got {type(t).__name__}")
    try:
        name = str(t["name"])
        seed = int(t["seed"])
    except KeyError as e:
        raise ConfigError(f"{path}: table.{e.args[0]} is required") from None
    except (TypeError, ValueError):
        raise ConfigError(f"{path}: table.seed must be an integer, got {t['seed']!r}") from None

    seats = []
    for i, s in enumerate(raw.get("seats") or []):
        if not isinstance(s, dict):
            raise ConfigError(f"seats[{i}]: expected a mapping, got {s!r}")
        kind = s.get("kind", "calling")
        if kind not in SEAT_KINDS:
            raise ConfigError(f"seats[{i}]: unknown kind {kind!r}, expected one of {SEAT_KINDS}")
        script = s.get("script") or []
        if script and kind != "scripted":
            raise ConfigError(f"seats[{i}]: only scripted seats take a script")
        seats.append(SeatConfig(name=s.get("name", f"seat{i}"), kind=kind, script=list(script)))

    if not 2 <= len(seats) <= MAX_SEATS:
        raise ConfigError(f"A table needs 2 to {MAX_SEATS} seats, got {len(seats)}")

    # Blind schedule: {round_id: small_blind, ...}
    blind_schedule = {}
    for round_id, size in (raw.get("blind_schedule") or {}).items():
        try:
            key = int(round_id)
        except (TypeError, ValueError):
            raise ConfigError(f"blind_schedule: round {round_id!r} is not an integer") from None
        blind_schedule[key] = _positive_int(size, f"blind_schedule[{round_id}]")

    output_dir = os.environ.get(OUTPUT_DIR_ENV) or raw.get("output_dir")

    return TableConfig(
        name=name,
        seed=seed,
        stack_size=_positive_int(t.get("stack_size", 1000), "table.stack_size"),
        blind_size=_positive_int(t.get("blind_size", 5), "table.blind_size"),
        rounds=_positive_int(t.get("rounds", 1), "table.rounds"),
        blind_schedule=blind_schedule,
        seats=seats,
        output_dir=Path(output_dir) if output_dir else None,
    )
