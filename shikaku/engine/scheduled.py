"""Seeds and layouts for the daily, weekly and monthly puzzles."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Dict, Optional

from ..core.constants import Difficulty
from ..core.models import Puzzle
from .generator import GeneratorConfig, generate_puzzle


@dataclass(frozen=True)
class ScheduledLayout:
    width: int
    height: int
    difficulty: Difficulty


SCHEDULED_LAYOUTS: Dict[str, ScheduledLayout] = {
    "daily": ScheduledLayout(width=10, height=10, difficulty=Difficulty.MEDIUM),
    "weekly": ScheduledLayout(width=20, height=20, difficulty=Difficulty.EXPERT),
    "monthly": ScheduledLayout(width=40, height=40, difficulty=Difficulty.NIGHTMARE),
}


def daily_seed(day: date) -> str:
    return f"daily-{day.isoformat()[:10]}"


def weekly_seed(day: date) -> str:
    """ISO week seed, e.g. ``weekly-2026-W42``; the year is the ISO week-numbering year."""

    iso_year, iso_week, _ = day.isocalendar()
    return f"weekly-{iso_year}-W{iso_week:02d}"


def monthly_seed(day: date) -> str:
    return f"monthly-{day.year:04d}-{day.month:02d}"


def scheduled_config(kind: str, seed: str) -> GeneratorConfig:
    layout = SCHEDULED_LAYOUTS[kind]
    return GeneratorConfig(
        difficulty=layout.difficulty, seed=seed, width=layout.width, height=layout.height
    )


def get_daily_puzzle(day: date) -> Puzzle:
    return generate_puzzle(scheduled_config("daily", daily_seed(day)))


def get_weekly_puzzle(day: date) -> Puzzle:
    return generate_puzzle(scheduled_config("weekly", weekly_seed(day)))


def get_monthly_puzzle(day: date) -> Puzzle:
    return generate_puzzle(scheduled_config("monthly", monthly_seed(day)))


def _utc_now(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def _utc_midnight(day: date) -> datetime:
    return datetime(day.year, day.month, day.day, tzinfo=timezone.utc)


def time_until_midnight_utc(now: Optional[datetime] = None) -> timedelta:
    current = _utc_now(now)
    return _utc_midnight(current.date() + timedelta(days=1)) - current


def time_until_monday_utc(now: Optional[datetime] = None) -> timedelta:
    current = _utc_now(now)
    days_ahead = 7 - current.weekday()
    return _utc_midnight(current.date() + timedelta(days=days_ahead)) - current


def time_until_first_of_month_utc(now: Optional[datetime] = None) -> timedelta:
    current = _utc_now(now)
    if current.month == 12:
        first = date(current.year + 1, 1, 1)
    else:
        first = date(current.year, current.month + 1, 1)
    return _utc_midnight(first) - current
