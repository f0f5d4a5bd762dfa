from .messaging_provider import ConsoleProvider, MessagingProvider, SendResult, TwilioProvider

__all__ = ["ConsoleProvider", "MessagingProvider", "SendResult", "TwilioProvider"]
