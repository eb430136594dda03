"""
Email Client for Notification Service

Delivers notification emails through a Resend-compatible HTTP API. When email is
disabled the message is only logged and reported as sent.
"""

import httpx
import logging
from typing import Optional

logger = logging.getLogger(__name__)


class EmailClient:
    """Outbound email delivery"""

    def __init__(
        self,
        api_url: Optional[str] = None,
        api_key: Optional[str] = None,
        from_email: Optional[str] = None,
        enabled: Optional[bool] = None,
        config=None,
        http_client=None,
    ):
        """
        Initialize email client

        Args:
            api_url: Email API base URL
            api_key: Bearer token for the email API
            from_email: Sender address
            enabled: Deliver for real (False logs the message instead)
            config: ConfigManager used for anything not given explicitly
            http_client: Pre-built HTTP client (tests)
        """
        if config is None and None in (api_url, from_email, enabled):
            from core.config_manager import ConfigManager
            config = ConfigManager("notification_service")
        service_config = config.get_service_config() if config else None

        self.api_url = (api_url or service_config.email_api_url).rstrip('/')
        self.api_key = api_key if api_key is not None else (service_config.email_api_key if service_config else None)
        self.from_email = from_email or service_config.email_from
        self.enabled = enabled if enabled is not None else service_config.email_enabled

        if self.enabled and not self.api_key:
            logger.warning("Email API key not configured, deliveries will fail")

        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        self.client = http_client or httpx.AsyncClient(headers=headers, timeout=30.0)

        logger.info(f"EmailClient initialized (enabled={self.enabled}, api={self.api_url})")

    async def close(self):
        await self.client.aclose()

    async def send_email(self, to: str, subject: str, body: str, is_html: bool = False) -> bool:
        """
        Send one email.

        Returns:
            True when the provider accepted the message (or email is disabled)
        """
        if not self.enabled:
            logger.info(f"Email disabled, not sending to {to}: {subject}")
            logger.debug(f"Email body:\n{body}")
            return True

        email_data = {
            "from": self.from_email,
            "to": [to],
            "subject": subject,
        }
        if is_html:
            email_data["html"] = body
        else:
            email_data["text"] = body

        response = await self.client.post(f"{self.api_url}/emails", json=email_data)

        if 200 <= response.status_code < 300:
            logger.info(f"Email sent to {to}: {subject}")
            return True

        logger.error(f"Email API error for {to}: {response.status_code} - {response.text}")
        return False
