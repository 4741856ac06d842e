# terra_server/infrastructure/email/smtp_email_sender.py
from __future__ import annotations

import smtplib
from email.mime.text import MIMEText

from terra_server.core.interfaces.email_sender import EmailSender


class SmtpEmailSender(EmailSender):
    def __init__(
        self,
        *,
        host: str,
        port: int,
        user: str,
        password: str,
        sender_email: str,
        timeout: float = 10.0,
    ) -> None:
        self._host = host
        self._port = port
        self._user = user
        self._password = password
        self._sender_email = sender_email or user
        self._timeout = timeout

    def send_email(self, *, to: str, subject: str, html_body: str) -> None:
        message = MIMEText(html_body, "html", "utf-8")
        message["From"] = self._sender_email
        message["To"] = to
        message["Subject"] = subject

        with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as smtp:
            smtp.starttls()
            if self._user:
                smtp.login(self._user, self._password)
            smtp.sendmail(self._sender_email, [to], message.as_string())
