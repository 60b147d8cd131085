"""Rich terminal display for fitness-rank."""

from __future__ import annotations

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

console = Console()

# Badge tier -> Rich color name
_TIER_COLORS: dict[str, str] = {
    "bronze": "dark_orange3",
    "silver": "grey70",
    "gold": "gold1",
    "platinum": "deep_sky_blue1",
    "diamond": "cyan",
}

_BRAND_COLOR = "dark_cyan"

# Heatmap intensity 0-4
_HEAT_CELLS = ["[grey23]■[/]", "[cyan]■[/]", "[deep_sky_blue1]■[/]", "[dodger_blue2]■[/]", "[blue3]■[/]"]

_NUTRITION_GRADES: list[tuple[float, str]] = [
    (2.5, "[green]Eating clean[/]"),
    (1.5, "[yellow]Moderate[/]"),
    (0.5, "[dark_orange]Slipping[/]"),
]


def _safe_color(tier: str) -> str:
    """Map a badge tier to a valid Rich color name."""
    return _TIER_COLORS.get(tier, "white")


def format_number(n: float) -> str:
    """Format large numbers: 421543 -> '421.5K', 1200 -> '1,200', 1234567 -> '1.2M'."""
    if n >= 1_000_000:
        value = n / 1_000_000
        if value >= 100:
            return f"{value:.0f}M"
        return f"{value:.1f}M"
    if n >= 10_000:
        value = n / 1_000
        if value >= 1000:
            return f"{value:.0f}K"
        return f"{value:.1f}K"
    if isinstance(n, float) and not n.is_integer():
        return f"{n:,.1f}"
    return f"{int(n):,}"


def _xp_bar(current: float, total: float, width: int = 20) -> str:
    """Render a progress bar as text: [████████░░░░░░░░░░░░]."""
    if total <= 0:
        return "[" + "█" * width + "]"
    ratio = max(0.0, min(current / total, 1.0))
    filled = int(ratio * width)
    empty = width - filled
    return "[" + "█" * filled + "░" * empty + "]"


def nutrition_grade(score: float, entries: int) -> str:
    if entries == 0:
        return "[grey50]No meals logged[/]"
    for threshold, label in _NUTRITION_GRADES:
        if score >= threshold:
            return label
    return "[red]Off track[/]"


def print_dashboard(data: dict) -> None:
    """Print the main dashboard with level, XP, streak, and badges."""
    level = data.get("level", 1)
    total_xp = data.get("xp", 0)
    xp_in_level = data.get("xp_in_level", 0)
    xp_for_next = data.get("xp_for_next", 1000)
    progress = data.get("progressToNextLevel", 0.0)
    stats = data.get("stats", {})
    earned_badges = data.get("earned_badges", [])
    closest_badges = data.get("closest_badges", [])

    lines: list[str] = []

    lines.append("")
    lines.append(f"  [bold {_BRAND_COLOR}]Level {level}[/]")
    bar = _xp_bar(xp_in_level, xp_for_next)
    lines.append(f"  {bar} {format_number(xp_in_level)}/{format_number(xp_for_next)} XP ({progress:.1f}%)")
    lines.append(f"  Total: [bold]{format_number(total_xp)}[/] XP")

    lines.append("")
    lines.append(
        f"  \U0001f525 Streak: {stats.get('streak', 0)} days  |  "
        f"Best: {data.get('longestStreak', 0)} days"
    )
    lines.append(
        f"  \U0001f6b4 Distance: {format_number(round(stats.get('totalDist', 0.0), 1))} km  |  "
        f"\U0001f3cb Sets: {format_number(stats.get('totalWorkouts', 0))}"
    )
    lines.append(
        f"  \U0001f957 Clean meals: {format_number(stats.get('totalGreenFood', 0))}  |  "
        f"\U0001f4aa Reps: {format_number(stats.get('totalBwReps', 0))}"
    )

    if earned_badges:
        lines.append("")
        lines.append("  [bold]Top Badges:[/]")
        for badge in earned_badges[:3]:
            color = _safe_color(badge.get("tier", "bronze"))
            lines.append(f"  ✅ [{color}]{badge['name']}[/] ({badge.get('description', '')})")

    if closest_badges:
        lines.append("")
        lines.append("  [bold]Almost There:[/]")
        for badge in closest_badges[:3]:
            target = badge.get("target", 0)
            current = badge.get("progress", 0)
            pct = int(current / target * 100) if target else 0
            lines.append(
                f"  ⏳ {badge['name']}: "
                f"{format_number(round(current, 1))}/{format_number(target)} ({pct}%)"
            )

    lines.append(f"\n  Badges earned: {data.get('badgesEarned', 0)}/{data.get('badgesTotal', 0)}")
    lines.append("")

    panel = Panel(
        "\n".join(lines),
        title="[bold]FITNESS RANK[/]",
        box=box.ROUNDED,
        border_style=_BRAND_COLOR,
        width=60,
    )
    console.print(panel)


def print_summary(summary: dict) -> None:
    """Print the window aggregation as a table."""
    window = summary.get("window", "overall")
    table = Table(
        title=f"Summary ({window})",
        box=box.ROUNDED,
        border_style=_BRAND_COLOR,
        show_header=True,
        header_style="bold",
    )
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    weight_note = "" if summary.get("weightEntries", 0) else " (last logged)"
    table.add_row("Avg Weight", f"{summary.get('avgWeight', 0.0):.1f} kg{weight_note}")

    cardio = summary.get("cardio", {})
    table.add_section()
    table.add_row("Cardio Sessions", str(cardio.get("sessions", 0)))
    table.add_row("Distance", f"{cardio.get('distance', 0.0):.1f} km")
    table.add_row("Duration", f"{cardio.get('duration', 0.0):.0f} min")
    table.add_row("Calories", format_number(cardio.get("calories", 0)))
    for name, totals in summary.get("cardioByCategory", {}).items():
        table.add_row(f"  {name.title()}", f"{totals.get('distance', 0.0):.1f} km")

    table.add_section()
    table.add_row("Strength Sets", str(summary.get("setsCount", 0)))
    table.add_row("Volume", f"{format_number(summary.get('totalVolume', 0))} kg")
    table.add_row("Bodyweight Logs", str(summary.get("bwCount", 0)))
    for name, totals in summary.get("bwByType", {}).items():
        table.add_row(f"  {name}", f"{format_number(totals.get('count', 0))} {totals.get('unit', 'reps')}")

    table.add_section()
    table.add_row(
        "Nutrition",
        f"{summary.get('nutritionScore', 0.0):.2f} "
        f"{nutrition_grade(summary.get('nutritionScore', 0.0), summary.get('nutritionEntries', 0))}",
    )

    console.print(table)


def print_badges(badges: list[dict], title: str = "Badges") -> None:
    """Print badges with progress bars.

    Each dict has: id, groupId, name, description, tier, isEarned, progress, target.
    """
    table = Table(
        title=title,
        box=box.ROUNDED,
        show_header=True,
        header_style="bold",
    )
    table.add_column("", width=2)
    table.add_column("Badge", min_width=20)
    table.add_column("Tier", width=10)
    table.add_column("Progress", min_width=24)

    for badge in badges:
        icon = "✅" if badge.get("isEarned") else "⏳"
        tier = badge.get("tier", "bronze")
        color = _safe_color(tier)

        name_text = f"[bold]{badge['name']}[/]\n{badge.get('description', '')}"
        tier_text = f"[{color}]{tier.upper()}[/{color}]"

        current = badge.get("progress", 0)
        target = badge.get("target", 0)
        bar = _xp_bar(current, target, width=10)
        progress_text = f"{bar} {format_number(round(current, 1))}/{format_number(target)}"

        table.add_row(icon, name_text, tier_text, progress_text)

    console.print(table)


def print_records(data: dict) -> None:
    """Print cardio personal records per category and the weight goal."""
    table = Table(
        title="Personal Records",
        box=box.ROUNDED,
        border_style=_BRAND_COLOR,
        show_header=True,
        header_style="bold",
    )
    table.add_column("Category", style="bold")
    table.add_column("Total", justify="right")
    table.add_column("Longest", justify="right")
    table.add_column("Calories", justify="right")
    table.add_column("Top Speed", justify="right")

    for name, rec in data.get("cardio", {}).items():
        table.add_row(
            name.title(),
            f"{rec.get('total_distance', 0.0):.1f} km",
            f"{rec.get('best_distance', 0.0):.1f} km",
            format_number(rec.get("best_calories", 0)),
            f"{rec.get('best_speed', 0.0):.1f} km/h",
        )
    bikes = data.get("bikes", {})
    if bikes:
        table.add_section()
        for label, rec in bikes.items():
            table.add_row(
                f"  {label}",
                f"{rec.get('total_distance', 0.0):.1f} km",
                f"{rec.get('best_distance', 0.0):.1f} km",
                format_number(rec.get("best_calories", 0)),
                f"{rec.get('best_speed', 0.0):.1f} km/h",
            )
    console.print(table)

    goal = data.get("goal", {})
    progress = goal.get("progress", 0.0)
    lines = [
        "",
        f"  Latest: {goal.get('latest_weight', 0.0):.1f} kg  |  Target: {goal.get('target_weight', 0.0):.1f} kg",
        f"  {_xp_bar(progress, 100)} {progress:.0f}%",
    ]
    if goal.get("target_date"):
        lines.append(f"  Target date: {goal['target_date']}")
    heatmap = data.get("heatmap", [])
    if heatmap:
        cells = "".join(_HEAT_CELLS[min(cell.get("intensity", 0), 4)] for cell in heatmap)
        lines.append("")
        lines.append(f"  Last {len(heatmap)} days: {cells}")
    lines.append("")
    console.print(
        Panel(
            "\n".join(lines),
            title="[bold]Weight Goal[/]",
            box=box.ROUNDED,
            border_style="green",
            width=60,
        )
    )


def print_config_result(result: dict) -> None:
    lines = [""]
    lines.append(f"  Data directory: [bold]{result.get('data_dir', '')}[/]")
    lines.append(f"  Target weight:  {result.get('target_weight', 0.0):.1f} kg")
    lines.append(f"  Target date:    {result.get('target_date') or '-'}")
    lines.append("")
    console.print(
        Panel(
            "\n".join(lines),
            title="[bold]Settings[/]",
            box=box.ROUNDED,
            border_style="green",
            width=60,
        )
    )


def print_no_data_message(data_dir: str = "") -> None:
    """Print message when the snapshot holds no logs."""
    where = f" in [bold]{data_dir}[/]" if data_dir else ""
    panel = Panel(
        f"\n  No logs found{where}.\n  Export your logs there or run [bold]fitness-rank config --set-data-dir PATH[/].\n",
        title="[bold]FITNESS RANK[/]",
        box=box.ROUNDED,
        border_style="grey50",
        width=60,
    )
    console.print(panel)
