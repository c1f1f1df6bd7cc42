from __future__ import annotations

"""Aggregations over ledger data for the statistics view."""

from datetime import date, timedelta
from typing import Mapping

from .stores import StudyTimeLedger


def daily_distribution(study_time: Mapping[str, float]) -> list[tuple[str, float]]:
    """(subject, hours) pairs with time recorded, largest first."""
    pairs = [(s, float(h)) for s, h in study_time.items() if h and h > 0]
    pairs.sort(key=lambda p: (-p[1], p[0]))
    return pairs


def subject_allocation(study_time: Mapping[str, float]) -> dict[str, float]:
    total = sum(h for h in study_time.values() if h and h > 0)
    if total <= 0:
        return {}
    return {s: round(h / total * 100, 1) for s, h in daily_distribution(study_time)}


def weekly_totals(ledger: StudyTimeLedger, end_date: str) -> list[tuple[str, float]]:
    """Seven (date, hours) pairs ending on ``end_date`` inclusive."""
    end = date.fromisoformat(end_date)
    out: list[tuple[str, float]] = []
    for offset in range(6, -1, -1):
        day = (end - timedelta(days=offset)).isoformat()
        hours = sum(h for h in ledger.study_time_for(day).values() if h and h > 0)
        out.append((day, round(hours, 1)))
    return out


def summary_text(study_time: Mapping[str, float], week: list[tuple[str, float]]) -> str:
    """One-line summary for the timer page: today by subject, then the week."""
    allocation = subject_allocation(study_time)
    parts = [f"{s}: {h:.1f}h ({allocation[s]:.0f}%)" for s, h in daily_distribution(study_time)]
    today = ", ".join(parts) if parts else "nothing yet"
    week_total = round(sum(h for _, h in week), 1)
    return f"Today: {today} | Last 7 days: {week_total:.1f}h"


__all__ = ["daily_distribution", "subject_allocation", "weekly_totals", "summary_text"]
