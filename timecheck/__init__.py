# TimeCheck - SMS Time-Use Tracker
# =================================
# Texts every subscriber every 15 minutes and records what they did.
#
# ARCHITECTURE LAYERS:
# - Domain:         Slot arithmetic, records and errors (no external dependencies)
# - Application:    Use cases (broadcast prompts, correlate replies, scheduling)
# - Infrastructure: External services (SQLite, Twilio SMS, configuration)
# - Web:            FastAPI HTTP surface (API routes and Twilio webhook)
