"""WhatsApp messages through Twilio"""

from typing import Optional

from twilio.base.exceptions import TwilioException
from twilio.rest import Client as TwilioClient
import structlog

from host_console.config import settings

logger = structlog.get_logger()


class MessagingError(Exception):
    """The messaging provider rejected or failed the send"""


class MessagingNotConfigured(MessagingError):
    """Twilio credentials or sender number are missing"""


def _client() -> TwilioClient:
    return TwilioClient(settings.twilio_account_sid, settings.twilio_auth_token)


def send_whatsapp(to: str, body: str, client: Optional[TwilioClient] = None) -> str:
    """Send ``body`` to ``to`` over WhatsApp and return the message SID"""
    if not settings.twilio_configured:
        raise MessagingNotConfigured(
            "Missing Twilio settings (TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN, TWILIO_WHATSAPP_NUMBER)"
        )

    client = client or _client()
    try:
        message = client.messages.create(
            body=body,
            from_=f"whatsapp:{settings.twilio_whatsapp_number}",
            to=f"whatsapp:{to}",
        )
    except (TwilioException, OSError) as e:
        logger.error("Failed to send WhatsApp message", to=to[-4:], error=str(e))
        raise MessagingError("Failed to send WhatsApp message") from e

    logger.info("WhatsApp message sent", to=to[-4:], sid=message.sid)
    return message.sid


def reservation_confirmation_text(restaurant_name: str, party_size: int, start_local) -> str:
    message = f"Your reservation at {restaurant_name} is confirmed! "
    message += f"{party_size} guests on "
    message += f"{start_local.strftime('%A, %B %d at %I:%M %p')}. "
    message += "Reply to modify or cancel."
    return message
