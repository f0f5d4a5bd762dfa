"""
TimeCheck - Web Server Entry Point
==================================

Run this to start the API, the Twilio webhook and the reminder scheduler:
    python main.py

Point your Twilio number's "A message comes in" webhook at
    {BASE_URL}/api/sms-webhook

To send one round of check-in prompts right now:
    python run_broadcast.py
"""

import logging

import uvicorn

from timecheck.infrastructure.config import get_settings


def main():
    """Start the web server."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.server.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    print("\n" + "=" * 50)
    print("   TimeCheck - SMS Time Tracker")
    print("=" * 50)
    print(f"\n   API running on http://{settings.server.host}:{settings.server.port}")
    if settings.schedule.enabled:
        print(f"   SMS reminders at minute {settings.schedule.cron_minute} "
              f"of hours {settings.schedule.active_hours}")
    else:
        print("   SMS reminders disabled")
    print(f"   Webhook URL: {settings.server.webhook_url}")
    print("   Press Ctrl+C to stop\n")

    uvicorn.run(
        "timecheck.web.app:app",
        host=settings.server.host,
        port=settings.server.port,
        log_level=settings.server.log_level.lower()
    )


if __name__ == "__main__":
    main()
