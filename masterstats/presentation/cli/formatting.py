"""Plain-text rendering of summoner reports and overall statistics."""
from __future__ import annotations

from typing import List

from masterstats.application.services.overall_statistics import OverallStatistics
from masterstats.application.use_cases import SummonerReport
from masterstats.domain.entities.view import Slot

_RESET = "\033[0m"


def format_number(value: int) -> str:
    """Thousands-separated integer, e.g. ``1,234,567``."""
    return f"{value:,}"


def _slot_line(position: int, slot: Slot) -> str:
    if slot.is_empty:
        return f"  {position}. -"
    return (f"  {position}. {slot.champion.display_name:<14} "
            f"{format_number(slot.champion_points):>10} - Level {slot.champion_level}")


def render_report(report: SummonerReport) -> str:
    statistic, view = report.statistic, report.view
    lines: List[str] = [
        f"{statistic.summoner_name} [{statistic.region.name}]",
        f"  Rank: {statistic.rank_label}",
        f"  Summoner Level: {statistic.summoner_level}",
        f"  Mastery Score: {format_number(statistic.mastery_score)}",
        f"  Total Champion Points: {format_number(statistic.total_champion_points)}",
        "",
        "Top champions:",
    ]
    lines += [_slot_line(i, slot) for i, slot in enumerate(view.top_champions, 1)]
    lines.append("Top champions without chest:")
    upper, lower = view.chestless_rows
    lines += [_slot_line(i, slot) for i, slot in enumerate(upper + lower, 1)]

    lines.append("Champion levels:")
    lines += [f"  Level {level}: {count}" for level, count in view.level_histogram.items()]

    lines.append("Highest grades:")
    lines.append("       " + "  ".join(f"{c:>3}" for c in view.grade_categories))
    for modifier, counts in view.grade_series():
        label = "base" if modifier == " " else modifier
        lines.append(f"  {label:<4} " + "  ".join(f"{n:>3}" for n in counts))

    lines.append("Champions and chests:")
    lines += [f"  {label}: {count}" for label, count in view.chest_series()]
    return "\n".join(lines)


def _ansi_color(hex_color: str) -> str:
    """24-bit foreground escape for a ``#rrggbb`` color."""
    r, g, b = (int(hex_color[i:i + 2], 16) for i in (1, 3, 5))
    return f"\033[38;2;{r};{g};{b}m"


def render_overall(overall: OverallStatistics, *, color: bool = False) -> str:
    """Region and region-tier counts; with ``color`` each tier row uses its tier color."""
    lines = [
        f"Players analyzed: {format_number(overall.total_summoners())}",
        f"Champions in game: {format_number(overall.current.champions_total)}",
    ]
    for region, count in overall.region_counts().items():
        lines.append(f"  {region.name}: {format_number(count)}")
    for region, tier, count in overall.tier_series():
        row = f"    {region.name}-{tier.display_name}: {format_number(count)}"
        lines.append(f"{_ansi_color(tier.color)}{row}{_RESET}" if color else row)
    return "\n".join(lines)
