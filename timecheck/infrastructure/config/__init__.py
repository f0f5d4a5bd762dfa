from .settings import (
    DatabaseSettings,
    ScheduleSettings,
    ServerSettings,
    Settings,
    TwilioSettings,
    get_settings,
)

__all__ = [
    "DatabaseSettings",
    "ScheduleSettings",
    "ServerSettings",
    "Settings",
    "TwilioSettings",
    "get_settings",
]
