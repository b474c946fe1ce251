#!/usr/bin/env python3
"""
Points Recalculation CLI

Re-derives stored net/gross positions and points from current scores and the
points tables in data/league_config.json, writing only rows that changed.

Usage:
    python recalculate.py                          # every tournament, both tracks
    python recalculate.py --tournament 12 --mode gross
    python recalculate.py --player 7
    python recalculate.py --category major --dry-run --report recalc.xlsx
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from golfpoints import JsonResultStore, RecalculationScope, RecalculationService
from golfpoints.config import load_config, points_config_from
from golfpoints.excel_export import export_recalculation
from golfpoints.exceptions import DuplicateConfigPosition, TournamentNotFound
from golfpoints.logging_config import setup_logging
from golfpoints.validators import validate_points_table


def build_scope(args: argparse.Namespace) -> RecalculationScope:
    """Turn CLI arguments into a recalculation scope."""
    if args.tournament is not None:
        return RecalculationScope.for_tournament(args.tournament, mode=args.mode)
    if args.player is not None:
        return RecalculationScope.for_player(args.player, mode=args.mode)
    return RecalculationScope.everything(category=args.category, mode=args.mode)


def main():
    parser = argparse.ArgumentParser(description="Recalculate golf positions and points")
    target = parser.add_mutually_exclusive_group()
    target.add_argument(
        "--tournament", "-t",
        type=int,
        default=None,
        help="Recalculate one tournament",
    )
    target.add_argument(
        "--player", "-p",
        type=int,
        default=None,
        help="Recalculate one player's results",
    )
    target.add_argument(
        "--category", "-c",
        choices=["major", "tour", "league", "supr", "all"],
        default=None,
        help="Recalculate every tournament of a category",
    )
    parser.add_argument(
        "--mode", "-m",
        choices=["net", "gross", "both"],
        default="both",
        help="Which track to recalculate (default: both)",
    )
    parser.add_argument(
        "--data-dir", "-d",
        default="data",
        help="Directory holding tournaments.json and results.json",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="League config path (defaults to <data-dir>/league_config.json)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would change without writing",
    )
    parser.add_argument(
        "--report",
        default=None,
        help="Write changed rows and the audit log to an .xlsx file",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the outcome as JSON",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log warnings",
    )

    args = parser.parse_args()

    setup_logging(
        level=logging.WARNING if args.quiet else logging.INFO,
        log_to_file=False,
        log_to_console=not args.json,
    )

    data_dir = Path(args.data_dir)
    config_path = Path(args.config) if args.config else data_dir / "league_config.json"

    try:
        league_config = load_config(config_path)
        points_config = points_config_from(league_config)
    except (FileNotFoundError, ValueError, DuplicateConfigPosition) as e:
        print(f"❌ Invalid points configuration: {e}")
        sys.exit(2)

    if not args.json:
        for category in points_config.malformed:
            print(f"⚠️  Malformed points table for {category} (pays 0)")
        for category in points_config.categories:
            for warning in validate_points_table(points_config.table_for(category)):
                print(f"⚠️  {warning}")

    store = JsonResultStore(data_dir)
    service = RecalculationService(
        store,
        points_config,
        dry_run=args.dry_run,
        lock_timeout=league_config.lock_timeout_seconds,
    )

    try:
        outcome = service.recalculate(build_scope(args))
    except TournamentNotFound as e:
        print(f"❌ {e}")
        sys.exit(1)

    if args.report:
        export_recalculation(args.report, outcome)

    if args.json:
        print(json.dumps(outcome.to_dict(), indent=2))
    else:
        prefix = "[dry run] " if args.dry_run else ""
        print(f"\n{prefix}{outcome.tournaments_processed} tournaments recalculated")
        for change in outcome.changed:
            print(
                f"  T{change.tournament_id} player {change.player_id} {change.track}: "
                f"pos {change.old_position} -> {change.new_position}, "
                f"pts {change.old_points} -> {change.new_points}"
            )
        if outcome.skipped_tournaments:
            print(f"  Skipped manual-entry tournaments: {outcome.skipped_tournaments}")
        if outcome.missing_tables:
            print(f"  ⚠️  No points table for: {', '.join(outcome.missing_tables)} (paid 0)")

        if outcome.status == "unchanged":
            print("Nothing needed changing.")
        elif outcome.status == "updated":
            print(f"{len(outcome.changed)} row changes.")
        else:
            print(
                f"⚠️  Partial: {len(outcome.failed_rows)} rows could not be processed, "
                f"{len(outcome.conflicted_tournaments)} tournaments busy (retry later)."
            )

    if outcome.status == "partial":
        sys.exit(3)


if __name__ == "__main__":
    main()
