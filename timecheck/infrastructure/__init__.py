# Infrastructure Layer
# ====================
# Contains all external service integrations:
# - sms/: Twilio SMS provider (console fallback for development)
# - persistence/: SQLite subscriber registry and activity ledger
# - config/: Environment and settings management
#
# This layer can be replaced entirely without affecting domain/application layers.
