# terra_server/infrastructure/security/jwt_provider.py

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from uuid import uuid4

import jwt

from terra_server.core.exceptions import TokenInvalidError


class TokenPurpose(str, Enum):
    ACCESS = "access"
    REFRESH = "refresh"
    RESET_PASSWORD = "reset_password"


@dataclass(frozen=True)
class TokenClaims:
    purpose: str
    jti: str
    issued_at: datetime
    expires_at: datetime
    user_id: str | None = None
    role: str | None = None
    email: str | None = None


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


class JwtProvider:
    ALGORITHM = "HS256"

    def __init__(
        self,
        *,
        secret: str,
        access_minutes: int = 15,
        refresh_minutes: int = 60 * 24 * 7,
        reset_minutes: int = 15,
    ) -> None:
        if not secret:
            raise ValueError("JWT secret must not be empty.")
        self._secret = secret
        self._access_ttl = timedelta(minutes=access_minutes)
        self._refresh_ttl = timedelta(minutes=refresh_minutes)
        self._reset_ttl = timedelta(minutes=reset_minutes)

    def _issue(self, *, purpose: TokenPurpose, ttl: timedelta, payload: dict) -> str:
        now = datetime.now(tz=timezone.utc)
        claims = {
            "iat": int(now.timestamp()),
            "exp": int((now + ttl).timestamp()),
            "jti": uuid4().hex,
            "purpose": purpose.value,
        }
        claims.update(payload)
        return jwt.encode(claims, self._secret, algorithm=self.ALGORITHM)

    def issue_access_token(self, *, user_id: str, role: str) -> str:
        return self._issue(
            purpose=TokenPurpose.ACCESS,
            ttl=self._access_ttl,
            payload={"user_id": str(user_id), "role": role},
        )

    def issue_refresh_token(self, *, user_id: str, role: str) -> str:
        return self._issue(
            purpose=TokenPurpose.REFRESH,
            ttl=self._refresh_ttl,
            payload={"user_id": str(user_id), "role": role},
        )

    def issue_access_and_refresh(self, *, user_id: str, role: str) -> TokenPair:
        return TokenPair(
            access_token=self.issue_access_token(user_id=user_id, role=role),
            refresh_token=self.issue_refresh_token(user_id=user_id, role=role),
        )

    def issue_reset_token(self, *, email: str) -> str:
        return self._issue(
            purpose=TokenPurpose.RESET_PASSWORD,
            ttl=self._reset_ttl,
            payload={"email": email},
        )

    def validate(self, token: str) -> TokenClaims:
        try:
            # algorithms is pinned, so "none"/RS*/other HS* headers are rejected
            raw = jwt.decode(
                token,
                self._secret,
                algorithms=[self.ALGORITHM],
                options={"require": ["exp", "iat", "jti", "purpose"]},
            )
        except jwt.InvalidTokenError as e:
            # ExpiredSignatureError is a subclass; both fail the same way
            raise TokenInvalidError() from e

        return TokenClaims(
            purpose=str(raw["purpose"]),
            jti=str(raw["jti"]),
            issued_at=datetime.fromtimestamp(int(raw["iat"]), tz=timezone.utc),
            expires_at=datetime.fromtimestamp(int(raw["exp"]), tz=timezone.utc),
            user_id=raw.get("user_id") or None,
            role=raw.get("role") or None,
            email=raw.get("email") or None,
        )
