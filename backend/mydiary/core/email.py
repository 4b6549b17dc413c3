"""Email sending via Resend API.

Simple HTTP POST to Resend for verification code emails, plain-text body.
Delivery failures are reported to the caller as ``False`` so the
verification workflow can undo the stored code; they are never raised.
"""

import logging
from typing import Protocol

import httpx

from mydiary.core.config import settings

logger = logging.getLogger(__name__)

_RESEND_API_URL = "https://api.resend.com/emails"
_RESEND_TIMEOUT = 10.0


class MailSender(Protocol):
    """Outbound mail collaborator used by the verification workflow."""

    async def send(self, *, to_email: str, subject: str, body: str) -> bool:
        """Deliver a plain-text email. Returns True on success."""
        ...


class ResendMailSender:
    """MailSender backed by the Resend HTTP API."""

    def __init__(self, *, api_key: str, from_email: str) -> None:
        self._api_key = api_key
        self._from_email = from_email

    async def send(self, *, to_email: str, subject: str, body: str) -> bool:
        try:
            async with httpx.AsyncClient() as client:
                resp = await client.post(
                    _RESEND_API_URL,
                    headers={"Authorization": f"Bearer {self._api_key}"},
                    json={
                        "from": self._from_email,
                        "to": to_email,
                        "subject": subject,
                        "text": body,
                    },
                    timeout=_RESEND_TIMEOUT,
                )
                resp.raise_for_status()
        except httpx.HTTPError:
            logger.warning("Failed to send email via Resend", exc_info=True)
            return False
        return True


class LoggingMailSender:
    """MailSender for local development when no Resend key is configured.

    Logs that a message was addressed, never its body (it carries the code).
    """

    async def send(self, *, to_email: str, subject: str, body: str) -> bool:  # noqa: ARG002
        logger.info("Email delivery skipped (no RESEND_API_KEY): %s", subject)
        return True


def get_mail_sender() -> MailSender:
    """Dependency that provides the configured mail sender."""
    api_key = settings.resend_api_key.get_secret_value()
    if not api_key:
        return LoggingMailSender()
    return ResendMailSender(api_key=api_key, from_email=settings.email_from)


def verification_email_body(code: int) -> str:
    """Plain-text body for a verification code email."""
    return (
        f"Your verification code is: {code}\n\n"
        "Enter this code on the verification page to activate your account. "
        "If you didn't register, you can safely ignore this email."
    )
