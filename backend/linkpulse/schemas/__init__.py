from .link import EnrichmentData, HistoryPoint, Link, LinkAnalytics, LinkCreate, LinkResponse
from .analytics import AnalyticsSummary, DailyClicks
from .settings import PlatformSettings

__all__ = [
    "EnrichmentData", "HistoryPoint", "Link", "LinkAnalytics", "LinkCreate", "LinkResponse",
    "AnalyticsSummary", "DailyClicks", "PlatformSettings",
]
