"""CLI commands for fitness-rank."""

from __future__ import annotations

import argparse
import logging
from datetime import date, datetime
from pathlib import Path

from fitness_rank.aggregation import CYCLING, RUNNING, TimeWindow, aggregate_window
from fitness_rank.badges import get_closest_badges, sort_badges
from fitness_rank.config import get_data_dir, get_goals, set_data_dir, set_goals
from fitness_rank.display import (
    console,
    print_badges,
    print_config_result,
    print_dashboard,
    print_no_data_message,
    print_records,
    print_summary,
)
from fitness_rank.engine import evaluate
from fitness_rank.levels import xp_progress_in_level
from fitness_rank.models import BIKE_EQUIPMENT, ActivityLogs
from fitness_rank.parser import LogSnapshotParser
from fitness_rank.records import (
    activity_heatmap,
    cardio_records,
    daily_weight_series,
    weight_goal_progress,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    parser = argparse.ArgumentParser(
        prog="fitness-rank",
        description="Gamify your activity logs",
    )
    parser.add_argument("--data-dir", "-d", default=None, help="Override the log snapshot directory")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("dashboard", help="Show main dashboard")
    summary_parser = subparsers.add_parser("summary", help="Totals and averages for a time window")
    summary_parser.add_argument(
        "--window", choices=[w.value for w in TimeWindow], default=TimeWindow.WEEKLY.value
    )
    badges_parser = subparsers.add_parser("badges", help="List badges")
    badges_parser.add_argument("--all", action="store_true", help="Show every milestone, not just the next ones")
    subparsers.add_parser("records", help="Personal records and weight goal")
    config_parser = subparsers.add_parser("config", help="Show or change settings")
    config_parser.add_argument("--set-data-dir", dest="set_data_dir", default=None, help="Store the snapshot directory")
    config_parser.add_argument("--target-weight", type=float, default=None, help="Goal weight in kg")
    config_parser.add_argument("--target-date", default=None, help="Goal date (YYYY-MM-DD)")
    return parser


def main() -> None:
    """Entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args()
    command = args.command or "dashboard"

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if command == "config":
        do_config(
            data_dir=args.set_data_dir,
            target_weight=args.target_weight,
            target_date=args.target_date,
        )
        return

    data_dir = Path(args.data_dir).expanduser() if args.data_dir else get_data_dir()
    logs = load_logs(data_dir)
    now = datetime.now().astimezone()

    if logs.is_empty():
        print_no_data_message(str(data_dir))
        return

    if command == "dashboard":
        do_dashboard(logs, now)
    elif command == "summary":
        do_summary(logs, now, window=args.window)
    elif command == "badges":
        do_badges(logs, now, show_all=args.all)
    elif command == "records":
        do_records(logs, now)


def load_logs(data_dir: Path) -> ActivityLogs:
    """Read the log snapshot from data_dir."""
    if not data_dir.is_dir():
        logger.warning("Snapshot directory %s does not exist", data_dir)
        return ActivityLogs()
    return LogSnapshotParser(data_dir).parse_snapshot()


def do_dashboard(logs: ActivityLogs, now: datetime) -> dict:
    """Show main dashboard with level, XP, streak and badges.

    Returns the dashboard data dict (useful for testing).
    """
    result = evaluate(logs, now)
    data = result.to_dict()
    xp_in_level, xp_for_next = xp_progress_in_level(result.total_xp)
    data["xp_in_level"] = xp_in_level
    data["xp_for_next"] = xp_for_next
    data["earned_badges"] = [b.to_dict() for b in result.badges if b.is_earned]
    data["closest_badges"] = [b.to_dict() for b in get_closest_badges(result.badges)]
    print_dashboard(data)
    return data


def do_summary(logs: ActivityLogs, now: datetime, window: str = "weekly") -> dict:
    """Show totals and averages for one time window."""
    summary = aggregate_window(logs, TimeWindow(window), now).to_dict()
    print_summary(summary)
    return summary


def do_badges(logs: ActivityLogs, now: datetime, show_all: bool = False) -> dict:
    """Show grouped badges, or every milestone with show_all."""
    result = evaluate(logs, now)
    if show_all:
        badges = sort_badges(result.all_badges)
        title = "All Badges"
    else:
        badges = result.badges
        title = "Badges"
    data = [b.to_dict() for b in badges]
    print_badges(data, title=title)
    return {
        "badges": data,
        "earned_count": sum(1 for b in result.all_badges if b.is_earned),
        "total_count": len(result.all_badges),
    }


def build_records(
    logs: ActivityLogs,
    now: datetime,
    target_weight: float,
    target_date: str | None = None,
    heatmap_days: int = 28,
) -> dict:
    """Cardio PRs per category and per bike, weight goal progress and the recent cardio heatmap."""
    by_category = {
        RUNNING: [log for log in logs.cardio if log.is_running],
        CYCLING: [log for log in logs.cardio if not log.is_running],
    }
    series = daily_weight_series(logs.weight, now)
    bikes = {
        label: [log for log in logs.cardio if log.equipment == equipment]
        for equipment, label in BIKE_EQUIPMENT.items()
    }
    return {
        "cardio": {name: vars(cardio_records(items)) for name, items in by_category.items()},
        "bikes": {label: vars(cardio_records(items)) for label, items in bikes.items() if items},
        "goal": {
            "latest_weight": series[-1][1] if series else 0.0,
            "start_weight": series[0][1] if series else 0.0,
            "target_weight": target_weight,
            "target_date": target_date,
            "progress": weight_goal_progress(logs.weight, target_weight, now),
        },
        "heatmap": [
            {
                "date": cell.day.isoformat(),
                "count": cell.count,
                "distance": round(cell.total_distance, 2),
                "intensity": cell.intensity,
            }
            for cell in activity_heatmap(logs.cardio, now, days=max(1, heatmap_days))
        ],
    }


def do_records(logs: ActivityLogs, now: datetime, config_path: Path | None = None) -> dict:
    """Show cardio personal records and weight goal progress."""
    goals = get_goals(config_path)
    data = build_records(logs, now, goals["target_weight"], goals["target_date"])
    print_records(data)
    return data


def do_config(
    data_dir: str | None = None,
    target_weight: float | None = None,
    target_date: str | None = None,
    config_path: Path | None = None,
) -> dict:
    """Update and show settings."""
    if target_date:
        try:
            date.fromisoformat(target_date)
        except ValueError:
            console.print(f"[red]Invalid date: {target_date}. Use YYYY-MM-DD.[/]")
            return {"ok": False, "reason": "invalid_date"}
    if data_dir:
        set_data_dir(Path(data_dir).expanduser().resolve(), config_path)
    if target_weight is not None or target_date:
        set_goals(target_weight=target_weight, target_date=target_date, config_path=config_path)

    goals = get_goals(config_path)
    result = {"ok": True, "data_dir": str(get_data_dir(config_path)), **goals}
    print_config_result(result)
    return result
