"""
Gmail notifications — sends HTML mail as the educator via users.messages.send.
"""

import base64
import logging
from email.message import EmailMessage
from typing import Any, Dict

from services.google_docs import execute, google_service

log = logging.getLogger(__name__)


def build_raw_message(sender: str, to: str, subject: str, html_body: str) -> str:
    """MIME message, base64url-encoded as the Gmail API expects."""
    message = EmailMessage()
    message["To"] = to
    message["From"] = sender
    message["Subject"] = subject
    message.set_content(html_body, subtype="html", charset="utf-8")
    return base64.urlsafe_b64encode(message.as_bytes()).decode("ascii")


async def send_email(
    access_token: str,
    sender: str,
    to: str,
    subject: str,
    html_body: str,
    gmail=None,
) -> Dict[str, Any]:
    """Send one email. Raises ValueError for a blank recipient, GoogleAPIError on API failure."""
    if not to or not to.strip():
        raise ValueError("Recipient email is missing!")

    if gmail is None:
        gmail = google_service("gmail", "v1", access_token)
    log.info(f"[MAIL] {sender} → {to}: {subject}")
    raw = build_raw_message(sender, to, subject, html_body)
    return await execute(
        gmail.users().messages().send(userId="me", body={"raw": raw}),
        f"Send email to {to}",
    )


def approval_email_body(subject: str, doc_link: str) -> str:
    return (
        "<p>Dear Student,</p>"
        f"<p>A new assignment for <strong>{subject}</strong> has been approved.</p>"
        "<p>Please review the assignment using the link below:</p>"
        f'<p><a href="{doc_link}">View Assignment</a></p>'
        "<p>Best regards,<br>Your Education Team</p>"
    )
