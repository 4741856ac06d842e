"""Tests for the SMTP email sender."""

from unittest.mock import MagicMock

import pytest

from terra_server.infrastructure.email import smtp_email_sender
from terra_server.infrastructure.email.smtp_email_sender import SmtpEmailSender


@pytest.fixture
def smtp(monkeypatch):
    factory = MagicMock()
    monkeypatch.setattr(smtp_email_sender.smtplib, "SMTP", factory)
    return factory


def test_sends_html_over_starttls(smtp):
    sender = SmtpEmailSender(
        host="smtp.example.com",
        port=587,
        user="bot@example.com",
        password="app-password",
        sender_email="noreply@example.com",
        timeout=5.0,
    )

    sender.send_email(to="ana@example.com", subject="Hello", html_body="<p>Hi</p>")

    smtp.assert_called_once_with("smtp.example.com", 587, timeout=5.0)
    conn = smtp.return_value.__enter__.return_value
    conn.starttls.assert_called_once()
    conn.login.assert_called_once_with("bot@example.com", "app-password")

    from_addr, to_addrs, message = conn.sendmail.call_args.args
    assert from_addr == "noreply@example.com"
    assert to_addrs == ["ana@example.com"]
    assert "Subject: Hello" in message
    assert "text/html" in message


def test_skips_login_without_credentials(smtp):
    sender = SmtpEmailSender(host="localhost", port=25, user="", password="", sender_email="noreply@example.com")

    sender.send_email(to="ana@example.com", subject="Hello", html_body="<p>Hi</p>")

    conn = smtp.return_value.__enter__.return_value
    conn.login.assert_not_called()
    conn.sendmail.assert_called_once()
