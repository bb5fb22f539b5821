"""History aggregation for the calendar heatmap"""

from datetime import date
from typing import Dict, Iterable, Tuple

from levelup.gamification.constants import HEATMAP_THRESHOLDS
from levelup.models import Completion, DaySummary


def heatmap_intensity(exp: int) -> int:
    """Bucket a day's EXP into 0 (nothing) .. 4 (brightest)"""
    if exp <= 0:
        return 0
    for bucket, upper in enumerate(HEATMAP_THRESHOLDS, start=1):
        if exp <= upper:
            return bucket
    return len(HEATMAP_THRESHOLDS) + 1


def summarize_by_date(completions: Iterable[Completion]) -> Dict[date, DaySummary]:
    """Group completed records by calendar date, oldest first"""
    grouped: Dict[date, list] = {}
    for completion in completions:
        if not completion.is_completed:
            continue
        grouped.setdefault(completion.date, []).append(completion)

    summaries = {}
    for day in sorted(grouped):
        day_completions = grouped[day]
        total_exp = sum(c.exp_awarded for c in day_completions)
        summaries[day] = DaySummary(
            date=day,
            completions=day_completions,
            total_exp=total_exp,
            intensity=heatmap_intensity(total_exp),
        )
    return summaries


def completions_in_year(summaries: Dict[date, DaySummary], year: int) -> Dict[date, DaySummary]:
    """Restrict day summaries to one calendar year"""
    return {day: summary for day, summary in summaries.items() if day.year == year}


def history_totals(summaries: Dict[date, DaySummary]) -> Tuple[int, int]:
    """(completed records, EXP earned) across the given days"""
    count = sum(s.count for s in summaries.values())
    exp = sum(s.total_exp for s in summaries.values())
    return count, exp
