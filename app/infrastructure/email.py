"""Transactional notification emails delivered through SendGrid."""

from __future__ import annotations

import html
import json
import logging
from dataclasses import dataclass
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from app.config import get_settings

logger = logging.getLogger(__name__)

BRAND_NAME = "Attar Al Jannah"

PRIORITY_COLORS = {
    "critical": "#dc2626",
    "high": "#ea580c",
    "medium": "#2563eb",
    "low": "#64748b",
}

PRIORITY_BADGES = {
    "critical": "Urgent",
    "high": "Important",
    "medium": "Update",
}


@dataclass(frozen=True)
class EmailSendResult:
    """Outcome of one email delivery attempt."""

    success: bool
    error: str | None = None


def is_email_configured() -> bool:
    """Return ``True`` when SendGrid credentials are present."""

    return get_settings().email_enabled


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, "", b""):
        return None
    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None
    if isinstance(body, str):
        try:
            body = json.loads(body)
        except json.JSONDecodeError:
            return body.strip() or None

    if isinstance(body, dict):
        messages = [
            str(item["message"])
            for item in body.get("errors") or []
            if isinstance(item, dict) and item.get("message")
        ]
        if messages:
            return "; ".join(messages)
        return json.dumps(body, default=str)
    if isinstance(body, list):
        return "; ".join(str(item) for item in body)
    return None


def _describe_failure(status_code: Any, body: Any) -> str:
    details = _extract_sendgrid_error_details(body)
    if status_code and details:
        return f"status {status_code}: {details}"
    if status_code:
        return f"status {status_code}"
    return details or "unknown SendGrid error"


def render_notification_email(
    *,
    subject: str,
    title: str,
    message: str,
    action_url: str | None = None,
    action_text: str = "View Details",
    priority: str = "medium",
) -> str:
    """Render the HTML body shared by every notification email."""

    color = PRIORITY_COLORS.get(priority, PRIORITY_COLORS["medium"])
    badge = PRIORITY_BADGES.get(priority)
    parts = [
        "<!DOCTYPE html>",
        '<html lang="en"><head><meta charset="UTF-8">',
        f"<title>{html.escape(subject)}</title></head>",
        '<body style="margin:0;padding:0;font-family:Arial,sans-serif;background-color:#f3f4f6;">',
        '<div style="max-width:600px;margin:40px auto;background:#ffffff;border-radius:8px;">',
        '<div style="padding:32px 40px;text-align:center;background:#667eea;border-radius:8px 8px 0 0;">',
        f'<h1 style="margin:0;color:#ffffff;font-size:26px;">{BRAND_NAME}</h1>',
        "</div>",
    ]
    if badge:
        parts.append(
            f'<div style="padding:20px 40px 0;"><span style="padding:6px 12px;'
            f"background-color:{color};color:#ffffff;border-radius:4px;font-size:12px;"
            f'font-weight:600;">{badge}</span></div>'
        )
    parts.extend(
        [
            '<div style="padding:20px 40px;">',
            f'<h2 style="margin:0 0 16px;color:#111827;">{html.escape(title)}</h2>',
            '<p style="margin:0;color:#4b5563;line-height:1.6;white-space:pre-line;">'
            f"{html.escape(message)}</p>",
            "</div>",
        ]
    )
    if action_url:
        parts.append(
            f'<div style="padding:0 40px 32px;"><a href="{html.escape(action_url, quote=True)}" '
            'style="display:inline-block;padding:14px 32px;background:#764ba2;color:#ffffff;'
            f'text-decoration:none;border-radius:6px;font-weight:600;">{html.escape(action_text)}</a></div>'
        )
    parts.extend(
        [
            '<div style="padding:24px 40px;border-top:1px solid #e5e7eb;color:#6b7280;font-size:13px;">',
            f"This email was sent by the {BRAND_NAME} notification system.",
            "</div></div></body></html>",
        ]
    )
    return "".join(parts)


def send_email(subject: str, html_content: str, recipient: str) -> EmailSendResult:
    """Send an email using the configured SendGrid credentials."""

    settings = get_settings()
    if not settings.email_enabled:
        logger.info("SendGrid configuration incomplete; skipping email delivery")
        return EmailSendResult(success=False, error="Email service not configured")

    mail = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
    )

    try:
        client = SendGridAPIClient(settings.sendgrid_api_key)
        response = client.send(mail)
    except Exception as exc:  # pragma: no cover - network failures depend on environment
        error = _describe_failure(
            getattr(exc, "status_code", None), getattr(exc, "body", None)
        )
        logger.error("SendGrid API request failed with %s", error)
        return EmailSendResult(success=False, error=error)

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        error = _describe_failure(status_code, getattr(response, "body", None))
        logger.error("SendGrid API responded with %s", error)
        return EmailSendResult(success=False, error=error)

    return EmailSendResult(success=True)


def send_notification_email(
    to: str,
    subject: str,
    title: str,
    message: str,
    *,
    action_url: str | None = None,
    action_text: str = "View Details",
    priority: str = "medium",
) -> EmailSendResult:
    """Render and send a notification email to ``to``."""

    html_content = render_notification_email(
        subject=subject,
        title=title,
        message=message,
        action_url=action_url,
        action_text=action_text,
        priority=priority,
    )
    return send_email(subject, html_content, to)


__all__ = [
    "EmailSendResult",
    "is_email_configured",
    "render_notification_email",
    "send_email",
    "send_notification_email",
]
