#!/usr/bin/env python3
"""
Leaderboard Export Script

Builds net and gross season leaderboards from stored results and prints them,
optionally saving both to an Excel workbook.

Usage:
    python scripts/export_leaderboard.py
    python scripts/export_leaderboard.py --rank-by best_events --output standings.xlsx
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from golfpoints import JsonResultStore, leaderboard_for_track
from golfpoints.config import load_config
from golfpoints.excel_export import export_leaderboard


def main():
    parser = argparse.ArgumentParser(description="Export season leaderboards")
    parser.add_argument("--data-dir", "-d", default="data", help="Path to data directory")
    parser.add_argument(
        "--rank-by",
        choices=["total", "best_events"],
        default="total",
        help="Rank on total points or on the best N events",
    )
    parser.add_argument("--output", "-o", default=None, help="Excel file to write")
    parser.add_argument("--top", type=int, default=20, help="Rows to print per track")
    args = parser.parse_args()

    data_dir = Path(args.data_dir)
    config = load_config(data_dir / "league_config.json")
    store = JsonResultStore(data_dir)

    tournaments = store.list_tournaments()
    results = store.all_results()

    leaderboards = {}
    for track in ("net", "gross"):
        rows = leaderboard_for_track(
            results,
            tournaments,
            track,
            rank_by=args.rank_by,
            best_events_count=config.best_events_count,
            include_zero=False,
        )
        leaderboards[track] = rows

        print("\n" + "=" * 60)
        print(f"{track.upper()} LEADERBOARD")
        print("=" * 60)
        for row in rows[:args.top]:
            points = row.best_events_points if args.rank_by == "best_events" else row.total_points
            print(f"  {row.rank}. {row.player_name or row.player_id}: {points:.1f} pts ({row.events} events)")

    if args.output:
        export_leaderboard(args.output, leaderboards)
        print(f"\nLeaderboards saved to {args.output}")


if __name__ == "__main__":
    main()
