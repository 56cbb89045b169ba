"""Transactional email via the Resend API.

Mail is best-effort: a failed send is logged and reported back as a
``Failed`` result, never raised, so callers on a request path are not
affected by the provider being down.
"""

import asyncio
import logging
from html import escape

import resend

from shared_lib.schemas import Delivered, DeliveryResult, Failed, MailMessage

logger = logging.getLogger(__name__)


class MailDispatcher:
    """Send HTML email through Resend and report the outcome."""

    def __init__(self, api_key: str):
        # The SDK keeps its key at module level.
        resend.api_key = api_key

    async def send(self, message: MailMessage) -> DeliveryResult:
        """Send a prepared message. Never raises."""
        try:
            # resend.Emails.send is blocking (requests under the hood)
            response = await asyncio.to_thread(
                resend.Emails.send, message.to_provider_params()
            )
        except Exception as e:
            logger.error("Email error: %s", e)
            return Failed(reason=str(e) or e.__class__.__name__)

        message_id = response.get("id") if response else None
        if not message_id:
            logger.error("Email error: provider returned no message id: %r", response)
            return Failed(reason="provider returned no message id")

        logger.info("Email sent: %s", message_id)
        return Delivered(message_id=message_id)

    async def send_mail(
        self, to: str | list[str], sender: str, subject: str, html: str
    ) -> DeliveryResult:
        """Send one email built from its four parts."""
        return await self.send(
            MailMessage(to=to, sender=sender, subject=subject, html=html)
        )


def render_new_memory_email(
    title: str, description: str, upload_date: str, tags: list[str]
) -> tuple[str, str]:
    """Build (subject, html) for the "new memory uploaded" notification."""
    subject = f"New memory: {title}"
    tag_line = ", ".join(escape(t) for t in tags) if tags else "none"
    html = (
        f"<h2>{escape(title)}</h2>"
        f"<p>{escape(description) or '<em>No description</em>'}</p>"
        f"<p><strong>Date:</strong> {escape(upload_date)}</p>"
        f"<p><strong>Tags:</strong> {tag_line}</p>"
    )
    return subject, html
