from unittest.mock import MagicMock

from twilio.base.exceptions import TwilioRestException

from timecheck.infrastructure.sms import ConsoleProvider, TwilioProvider


def _provider(client):
    return TwilioProvider("AC123", "secret", from_number="+15550000", client=client)


def test_twilio_send_returns_message_sid():
    client = MagicMock()
    client.messages.create.return_value = MagicMock(sid="SM123")

    result = _provider(client).send_message("+15550100", "hello")

    assert result.success is True
    assert result.message_sid == "SM123"
    client.messages.create.assert_called_once_with(to="+15550100", from_="+15550000", body="hello")


def test_twilio_rest_error_becomes_failed_result():
    client = MagicMock()
    client.messages.create.side_effect = TwilioRestException(
        400, "/Messages", msg="The 'To' number is not a valid phone number."
    )

    result = _provider(client).send_message("not-a-number", "hello")

    assert result.success is False
    assert "not a valid phone number" in result.error
    assert client.messages.create.call_count == 1


def test_network_error_becomes_failed_result():
    client = MagicMock()
    client.messages.create.side_effect = ConnectionError("timed out")

    result = _provider(client).send_message("+15550100", "hello")

    assert result.success is False
    assert result.error == "timed out"


def test_console_provider_always_succeeds():
    result = ConsoleProvider().send_message("+15550100", "hello")
    assert result.success is True
    assert result.message_sid.startswith("console-")
