from .activity_ledger import ActivityLedger
from .database import Database
from .subscriber_registry import SubscriberRegistry

__all__ = ["ActivityLedger", "Database", "SubscriberRegistry"]
