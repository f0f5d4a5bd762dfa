"""
Messaging Provider - Abstraction Layer for SMS Messaging
=========================================================

Provides a unified interface for sending text messages.
Twilio is the production backend; the console provider only logs and is
used for local development when no Twilio credentials are set.

USAGE:
    provider = TwilioProvider(account_sid, auth_token, from_number="+15550000")
    result = provider.send_message("+15550100", "Hello!")
    if not result.success:
        print(result.error)

Delivery failures never raise: every provider returns a SendResult and the
caller decides whether to continue (batch) or surface the error (single send).
"""

import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from twilio.base.exceptions import TwilioException
from twilio.http.http_client import TwilioHttpClient
from twilio.rest import Client

logger = logging.getLogger(__name__)


@dataclass
class SendResult:
    """Outcome of one outbound SMS."""

    success: bool
    message_sid: Optional[str] = None
    error: Optional[str] = None


class MessagingProvider(ABC):
    """
    Abstract base class for SMS messaging providers.
    Implement this interface to add new messaging backends.
    """

    @abstractmethod
    def send_message(self, phone: str, text: str) -> SendResult:
        """Send a text message to a phone number. At most one attempt."""
        ...

    def close(self) -> None:
        """Clean up resources."""
        return None


class TwilioProvider(MessagingProvider):
    """Twilio Programmable Messaging backend."""

    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        from_number: str,
        timeout_seconds: float = 10.0,
        client: Optional[Client] = None,
    ):
        self._from_number = from_number
        self._client = client or Client(
            account_sid,
            auth_token,
            http_client=TwilioHttpClient(timeout=timeout_seconds),
        )

    def send_message(self, phone: str, text: str) -> SendResult:
        """Create a message through the Twilio REST API."""
        try:
            message = self._client.messages.create(
                to=phone,
                from_=self._from_number,
                body=text,
            )
        except TwilioException as e:
            logger.error(f"Twilio rejected message to {phone}: {e}")
            return SendResult(success=False, error=str(e))
        except Exception as e:  # network errors surface from requests
            logger.error(f"Error sending SMS to {phone}: {e}")
            return SendResult(success=False, error=str(e))

        logger.debug(f"Twilio accepted message {message.sid} to {phone}")
        return SendResult(success=True, message_sid=message.sid)


class ConsoleProvider(MessagingProvider):
    """Logs messages instead of sending them. Used when Twilio is not configured."""

    def send_message(self, phone: str, text: str) -> SendResult:
        sid = f"console-{uuid.uuid4().hex[:16]}"
        logger.info(f"[console sms] to={phone} sid={sid}: {text}")
        return SendResult(success=True, message_sid=sid)
