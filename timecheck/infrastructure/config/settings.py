"""
Settings Module - Centralized Configuration Management
=======================================================

ARCHITECTURAL DECISION:
- All configuration is loaded from environment variables (no hardcoded secrets)
- Settings are immutable dataclasses for safety and clarity
- Single source of truth for all configurable values

The reminder cadence and active-hours window are configuration, not logic:
they are handed to the scheduler as cron fields.
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

# Load .env file if present (development convenience)
load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> tuple[str, ...]:
    raw = os.getenv(name) or default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class TwilioSettings:
    """Twilio SMS credentials."""

    account_sid: str = field(default_factory=lambda: os.getenv("TWILIO_ACCOUNT_SID", ""))
    auth_token: str = field(default_factory=lambda: os.getenv("TWILIO_AUTH_TOKEN", ""))
    phone_number: str = field(default_factory=lambda: os.getenv("TWILIO_PHONE_NUMBER", ""))

    # A stalled HTTP call must not hold the scheduler thread
    timeout_seconds: float = field(
        default_factory=lambda: float(os.getenv("TWILIO_TIMEOUT_SECONDS", "10"))
    )

    @property
    def is_configured(self) -> bool:
        return bool(self.account_sid and self.auth_token and self.phone_number)


@dataclass(frozen=True)
class ScheduleSettings:
    """Check-in prompt schedule (cron fields) and send pacing."""

    enabled: bool = field(default_factory=lambda: _env_bool("REMINDERS_ENABLED", True))

    # Every quarter hour, 5 AM through 11 PM
    cron_minute: str = field(default_factory=lambda: os.getenv("REMINDER_CRON_MINUTE", "0,15,30,45"))
    active_hours: str = field(default_factory=lambda: os.getenv("REMINDER_ACTIVE_HOURS", "5-23"))

    # SAFETY: delay between sends to stay under provider rate limits
    pacing_delay_seconds: float = field(
        default_factory=lambda: float(os.getenv("REMINDER_PACING_SECONDS", "0.1"))
    )

    # Empty means the process local zone, which slot computation also uses
    timezone: str = field(default_factory=lambda: os.getenv("REMINDER_TIMEZONE", ""))


@dataclass(frozen=True)
class DatabaseSettings:
    """SQLite storage."""

    path: Path = field(
        default_factory=lambda: Path(os.getenv("DATABASE_PATH", "timecheck.db"))
    )
    busy_timeout_seconds: float = 10.0


@dataclass(frozen=True)
class ServerSettings:
    """HTTP server settings."""

    host: str = field(default_factory=lambda: os.getenv("HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "3000")))
    base_url: str = field(default_factory=lambda: os.getenv("BASE_URL", ""))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    # Comma-separated browser origins allowed to call the API
    cors_origins: tuple[str, ...] = field(default_factory=lambda: _env_list("CORS_ORIGINS", "*"))

    @property
    def webhook_url(self) -> str:
        base = self.base_url or f"http://localhost:{self.port}"
        return f"{base.rstrip('/')}/api/sms-webhook"


@dataclass(frozen=True)
class Settings:
    """
    Root settings container - Single source of truth for all configuration.

    Usage:
        from timecheck.infrastructure.config import get_settings
        settings = get_settings()
        print(settings.schedule.active_hours)
    """

    twilio: TwilioSettings = field(default_factory=TwilioSettings)
    schedule: ScheduleSettings = field(default_factory=ScheduleSettings)
    database: DatabaseSettings = field(default_factory=DatabaseSettings)
    server: ServerSettings = field(default_factory=ServerSettings)

    def validate(self) -> list[str]:
        """
        Validate settings and return list of warnings/errors.
        Returns empty list if all settings are valid.
        """
        issues = []

        if not self.twilio.is_configured:
            issues.append(
                "WARNING: TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN or TWILIO_PHONE_NUMBER not set. "
                "Messages will only be logged to the console."
            )

        if self.schedule.pacing_delay_seconds < 0:
            issues.append("ERROR: REMINDER_PACING_SECONDS must not be negative.")

        if not self.schedule.enabled:
            issues.append("WARNING: REMINDERS_ENABLED is off. No check-in prompts will be sent.")

        return issues


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get singleton Settings instance.
    Cached to ensure consistent settings throughout application lifecycle.
    """
    return Settings()
