from datetime import date, datetime, timedelta, timezone
from typing import Callable, Iterable, List, Optional

from ..schemas.analytics import AnalyticsSummary, DailyClicks
from ..schemas.link import HistoryPoint, Link


def utc_today() -> date:
    """Current calendar date in UTC"""
    return datetime.now(timezone.utc).date()


def window_dates(window_days: int, today: Optional[date] = None) -> List[date]:
    """Consecutive calendar days, oldest first, ending at today"""
    if window_days < 1:
        raise ValueError("window_days must be at least 1")
    end = today or utc_today()
    return [end - timedelta(days=offset) for offset in range(window_days - 1, -1, -1)]


def build_history(
    days: int = 7,
    today: Optional[date] = None,
    clicks: Optional[Callable[[], int]] = None
) -> List[HistoryPoint]:
    """
    History for a trailing window of `days` ending at today.

    Uses the same day sequence as aggregate_daily so both sides join on
    identical dates. `clicks` supplies per-day counts (zero by default).
    """
    return [
        HistoryPoint(date=day, clicks=clicks() if clicks else 0)
        for day in window_dates(days, today)
    ]


def aggregate_daily(
    links: Iterable[Link],
    window_days: int = 7,
    today: Optional[date] = None
) -> List[DailyClicks]:
    """Total clicks per day across all links for the trailing window"""
    days = window_dates(window_days, today)
    totals = {day: 0 for day in days}

    for link in links:
        seen = set()
        for point in link.analytics.history:
            # Only the first entry per day counts; days outside the window contribute nothing
            if point.date in totals and point.date not in seen:
                totals[point.date] += point.clicks
                seen.add(point.date)

    return [DailyClicks(date=day, total_clicks=totals[day]) for day in days]


def summarize(
    links: Iterable[Link],
    window_days: int = 7,
    today: Optional[date] = None
) -> AnalyticsSummary:
    """
    Daily series plus totals for the analytics view.

    averageClicksPerDay uses round-half-to-even (2.5 -> 2, 3.5 -> 4).
    """
    links = list(links)
    series = aggregate_daily(links, window_days, today)
    total_clicks = sum(point.total_clicks for point in series)

    return AnalyticsSummary(
        window_days=window_days,
        total_clicks=total_clicks,
        average_clicks_per_day=round(total_clicks / window_days),
        active_links=len(links),
        series=series,
    )
