import datetime
from typing import List
from .link import CamelModel


class DailyClicks(CamelModel):
    """Total clicks across all links for one day"""
    date: datetime.date
    total_clicks: int


class AnalyticsSummary(CamelModel):
    """Aggregated click traffic for the trailing window"""
    window_days: int
    total_clicks: int
    average_clicks_per_day: int
    active_links: int
    series: List[DailyClicks]
