"""
Broadcast Runner - One Round of Check-In Prompts
================================================

Sends the "what did you do" prompt to every active subscriber immediately,
outside the regular schedule. Useful after registering a new number or when
testing Twilio credentials.
"""

import sys
import logging

from timecheck.application import build_services
from timecheck.infrastructure.config import get_settings

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def run_broadcast() -> int:
    """Run one broadcast pass. Returns a process exit code."""

    print("\n" + "=" * 60)
    print("   TimeCheck - Broadcast Runner")
    print("=" * 60 + "\n")

    settings = get_settings()
    for issue in settings.validate():
        print(f"   {issue}")

    services = build_services(settings)
    try:
        report = services.broadcaster.broadcast()
    finally:
        services.close()

    print("\n" + "=" * 60)
    if report.error:
        print(f"Broadcast failed: {report.error}")
        print("=" * 60 + "\n")
        return 1

    print("Broadcast Complete!")
    print(f"   Sent: {report.sent} | Failed: {report.failed}")
    for phone, error in report.failures:
        print(f"   {phone}: {error}")
    print("=" * 60 + "\n")
    return 0 if not report.failed else 2


if __name__ == "__main__":
    sys.exit(run_broadcast())
