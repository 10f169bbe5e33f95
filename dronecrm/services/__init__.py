"""Service-layer utilities."""

from .advisory import FlightAdvisory, FlightLimits, FlightStatus, SprayingBadges, classify, spraying_badges
from .forecast import nearest_snapshot, select_snapshot
from .kpis import DashboardKPIs, KPIService
from .notifications import NOTIFICATIONS, NoticeLevel, NotificationLog
from .records import RecordStore
from .store import CRMStore
from .weather import OpenWeatherProvider, WeatherProvider, WeatherSnapshot
from .weather_dashboard import DashboardState, WeatherDashboard

__all__ = [
    "CRMStore",
    "DashboardKPIs",
    "DashboardState",
    "FlightAdvisory",
    "FlightLimits",
    "FlightStatus",
    "KPIService",
    "NOTIFICATIONS",
    "NoticeLevel",
    "NotificationLog",
    "OpenWeatherProvider",
    "RecordStore",
    "SprayingBadges",
    "WeatherDashboard",
    "WeatherProvider",
    "WeatherSnapshot",
    "classify",
    "nearest_snapshot",
    "select_snapshot",
    "spraying_badges",
]
