"""
Print a round-robin schedule for the given names.

Usage:
  python -m fixturegen.run_schedule Alice Bob Carol Dave --doubled
  python -m fixturegen.run_schedule Alice Bob Carol --gameweek 2 --json
"""
from __future__ import annotations

import argparse
import json

from fixturegen.config import configure_logging
from fixturegen.models import Schedule, ScheduleSummary
from fixturegen.services.tournament_service import TournamentService


def _summary_line(summary: ScheduleSummary) -> str:
    return (
        f"{summary.participant_count} players = {summary.matches_per_gameweek} matches per gameweek"
        f" × {summary.total_gameweeks} gameweeks = {summary.total_matches} total matches"
    )


def _print_schedule(schedule: Schedule, only_gameweek: int | None = None) -> None:
    for gameweek, fixtures in sorted(schedule.by_gameweek().items()):
        if only_gameweek is not None and gameweek != only_gameweek:
            continue
        print(f"\n  GAMEWEEK {gameweek}  ({len(fixtures)} matches)")
        print("  " + "-" * 40)
        for f in fixtures:
            print(f"  {f.home.name:>16}  vs  {f.away.name}")


def run(
    names: list[str],
    doubled: bool = False,
    gameweek: int | None = None,
    as_json: bool = False,
) -> Schedule:
    svc = TournamentService(doubled=doubled)
    for name in names:
        svc.add_participant(name)
    schedule = svc.generate(strict=True)
    if as_json:
        data = schedule.to_dict()
        if gameweek is not None:
            data["gameweeks"] = [g for g in data["gameweeks"] if g["gameweek"] == gameweek]
        print(json.dumps(data, indent=2))
        return schedule
    print(f"\n  {_summary_line(svc.summary())}")
    _print_schedule(schedule, only_gameweek=gameweek)
    print()
    return schedule


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Generate round-robin fixtures grouped by gameweek.")
    parser.add_argument("names", nargs="*", help="Participant names, in seeding order")
    parser.add_argument("--doubled", action="store_true", help="Home/away mode: every pair meets twice")
    parser.add_argument("--gameweek", type=int, default=None, help="Only show this gameweek")
    parser.add_argument("--json", action="store_true", help="Print the schedule as JSON")
    parser.add_argument("--log-level", default=None, help="Logging level (default from FIXTUREGEN_LOG_LEVEL)")
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    if args.gameweek is not None and args.gameweek < 1:
        parser.error("--gameweek must be >= 1")
    try:
        run(args.names, doubled=args.doubled, gameweek=args.gameweek, as_json=args.json)
    except ValueError as e:
        parser.error(str(e))


if __name__ == "__main__":
    main()
