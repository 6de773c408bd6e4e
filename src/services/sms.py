"""Sends SMS messages through the Twilio Messages REST API."""

import json
import logging
from typing import Optional

import requests

from src.config.config import TWILIO_API_BASE_URL
from src.config.config_loader import get_config
from src.exceptions import RemoteServiceError

logger = logging.getLogger(__name__)

# Twilio's own client waits this long before giving up
REQUEST_TIMEOUT_SECONDS = 30


def build_reminder_body(message: str, date_time: Optional[str]) -> str:
    """Message text with the reminder time appended on its own line."""
    return f"{message}\nScheduled for: {date_time}"


class SmsSender:
    """Thin client for POST /Accounts/{sid}/Messages.json."""

    def __init__(self, account_sid: str, auth_token: str, from_number: str, base_url: str = TWILIO_API_BASE_URL):
        self.account_sid = account_sid
        self._auth = (account_sid, auth_token)
        self.from_number = from_number
        self.messages_url = f"{base_url}/Accounts/{account_sid}/Messages.json"

    def send(self, to: str, body: str) -> str:
        """Sends body to the given number and returns the Twilio message SID.

        Raises:
            RemoteServiceError: On transport failure or a provider error response.
        """
        data = {'To': to, 'From': self.from_number, 'Body': body}
        try:
            response = requests.post(self.messages_url, data=data, auth=self._auth, timeout=REQUEST_TIMEOUT_SECONDS)
            response.raise_for_status()
            payload = response.json()
        except requests.exceptions.HTTPError as e:
            provider_message = _provider_error_message(e.response)
            logger.error(f"Twilio rejected message to {to}: {provider_message}")
            raise RemoteServiceError(provider_message) from e
        except json.JSONDecodeError as e:
            logger.error(f"Error decoding Twilio response for message to {to}: {e}")
            raise RemoteServiceError("Invalid response from messaging provider") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Error sending SMS to {to}: {e}", exc_info=True)
            raise RemoteServiceError(f"Error sending SMS: {e}") from e

        sid = payload.get('sid')
        if not sid:
            raise RemoteServiceError("Messaging provider response did not include a message SID")
        logger.info(f"SMS sent to {to} (sid {sid})")
        return sid


def _provider_error_message(response: Optional[requests.Response]) -> str:
    if response is None:
        return "Messaging provider error"
    try:
        return response.json().get('message') or f"Messaging provider error ({response.status_code})"
    except ValueError:
        return f"Messaging provider error ({response.status_code})"


def get_sms_sender() -> Optional[SmsSender]:
    """Dependency provider: a sender built from the Twilio configuration, or None if it is incomplete."""
    config = get_config()
    if not config.sms_enabled:
        return None
    return SmsSender(config.twilio_account_sid, config.twilio_auth_token, config.twilio_from_number)
