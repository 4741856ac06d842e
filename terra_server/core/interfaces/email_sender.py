# terra_server/core/interfaces/email_sender.py
from __future__ import annotations

from typing import Protocol


class EmailSender(Protocol):
    def send_email(self, *, to: str, subject: str, html_body: str) -> None:
        """Deliver one HTML message. Raises on transport failure."""
        raise NotImplementedError
