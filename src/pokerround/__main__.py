"""CLI entry point: python -m pokerround <table.yaml>"""

import argparse
import logging
import sys
from pathlib import Path

from pokerround.config import load_config
from pokerround.holdem.errors import PokerRoundError
from pokerround.runner import TableRunner


def _print_action(round_id: int, action) -> None:
    print(f"  [{round_id:>3}] {action}")


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="pokerround",
        description="Play no-limit Hold'em rounds at a configured table",
    )
    parser.add_argument(
        "config",
        type=Path,
        help="Path to table YAML config file",
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Output directory for the action log (default: output/actions/)",
    )
    parser.add_argument(
        "--rounds",
        type=int,
        default=None,
        help="Number of rounds to play (default: table.rounds from the config)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=False,
        help="Log engine stage transitions",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.config.exists():
        print(f"Error: config file not found: {args.config}", file=sys.stderr)
        sys.exit(1)

    try:
        config = load_config(args.config)
        if args.output:
            config.output_dir = args.output

        print(f"Table: {config.name} (seed={config.seed}, blind={config.blind_size})")
        print(f"Seats: {', '.join(f'{s.name} ({s.kind})' for s in config.seats)}")
        print()

        result = TableRunner(config).run(rounds=args.rounds, on_action=_print_action)
    except PokerRoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print()
    print("-" * 60)
    print(f"FINAL STACKS after {result.rounds_played} rounds")
    print("-" * 60)
    for seat, (name, stack) in enumerate(zip(result.seat_names, result.stacks)):
        marker = "  (busted)" if seat in result.busted else ""
        print(f"  {seat:>2}. {name:20s} {stack:>8d}{marker}")
    print()
    print(f"Action log: {result.log_path}")


if __name__ == "__main__":
    main()
