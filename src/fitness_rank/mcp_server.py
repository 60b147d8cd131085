"""MCP server for fitness-rank.

Exposes computed scores as MCP tools so an assistant can query them mid-conversation.
Every tool re-reads the log snapshot and recomputes; nothing is cached.
Run via: python3 -m fitness_rank.mcp_server
"""
from __future__ import annotations

from datetime import datetime
from typing import Any

from mcp.server.fastmcp import FastMCP

from fitness_rank.aggregation import TimeWindow, aggregate_window
from fitness_rank.models import ActivityLogs

mcp = FastMCP(name="fitness-rank")


def _load_logs() -> ActivityLogs:
    from fitness_rank.cli import load_logs
    from fitness_rank.config import get_data_dir
    return load_logs(get_data_dir())


def _now() -> datetime:
    return datetime.now().astimezone()


@mcp.tool()
def get_rank() -> dict[str, Any]:
    """Get current rank: level, XP, progress to next level, streak and stats."""
    from fitness_rank.engine import evaluate
    logs = _load_logs()
    if logs.is_empty():
        return {"error": "No logs found. Set the data directory with: fitness-rank config --set-data-dir PATH"}
    data = evaluate(logs, _now()).to_dict()
    data.pop("badges", None)
    return data


@mcp.tool()
def get_badges(show_all: bool = False) -> dict[str, Any]:
    """Get badges with earned state and progress. show_all lists every milestone."""
    from fitness_rank.badges import sort_badges
    from fitness_rank.engine import evaluate
    result = evaluate(_load_logs(), _now())
    badges = sort_badges(result.all_badges) if show_all else result.badges
    return {
        "badges": [b.to_dict() for b in badges],
        "earned_count": sum(1 for b in result.all_badges if b.is_earned),
        "total_count": len(result.all_badges),
    }


@mcp.tool()
def get_summary(window: str = "weekly") -> dict[str, Any]:
    """Get activity totals and averages for a window (daily, weekly, monthly or overall)."""
    valid = {w.value for w in TimeWindow}
    if window not in valid:
        return {"error": f"Invalid window. Must be one of: {', '.join(sorted(valid))}"}
    logs = _load_logs()
    if logs.is_empty():
        return {"error": "No logs found."}
    return aggregate_window(logs, TimeWindow(window), _now()).to_dict()


@mcp.tool()
def get_records(heatmap_days: int = 30) -> dict[str, Any]:
    """Get cardio personal records, weight goal progress and a recent activity heatmap."""
    from fitness_rank.cli import build_records
    from fitness_rank.config import get_goals
    logs = _load_logs()
    if logs.is_empty():
        return {"error": "No logs found."}
    goals = get_goals()
    return build_records(
        logs, _now(), goals["target_weight"], goals["target_date"], heatmap_days=heatmap_days
    )


def main() -> None:
    mcp.run()


if __name__ == "__main__":
    main()
