# terra_server/core/interfaces/google_identity.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass(frozen=True)
class GoogleIdentity:
    email: str
    email_verified: bool
    name: Optional[str] = None
    subject: Optional[str] = None


class GoogleIdentityVerifier(Protocol):
    def verify_credential(self, credential: str) -> GoogleIdentity: ...
