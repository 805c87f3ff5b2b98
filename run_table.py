#!/usr/bin/env python3
"""Run a configured table and print the final stacks."""

import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path.cwd() / ".env")

from pokerround.config import load_config
from pokerround.runner import TableRunner

cfg_path = sys.argv[1] if len(sys.argv) > 1 else "table.yaml.example"
config = load_config(Path(cfg_path))
runner = TableRunner(config)

print(f"Running table {config.name}: {len(config.seats)} seats, {config.rounds} rounds")

result = runner.run()

print(f"\nRounds played: {result.rounds_played}")
print(f"Stacks: {dict(zip(result.seat_names, result.stacks))}")
print(f"Busted: {[result.seat_names[s] for s in result.busted]}")
print(f"Action log: {result.log_path}")
