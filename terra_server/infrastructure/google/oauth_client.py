# terra_server/infrastructure/google/oauth_client.py

from __future__ import annotations

import requests
from authlib.common.errors import AuthlibBaseError
from authlib.integrations.requests_client import OAuth2Session

from terra_server.core.exceptions import InvalidGoogleTokenError
from terra_server.core.interfaces.google_identity import GoogleIdentity
from terra_server.core.logging import get_logger

logger = get_logger(__name__)

GOOGLE_AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"
GOOGLE_SCOPES = "openid https://www.googleapis.com/auth/userinfo.email https://www.googleapis.com/auth/userinfo.profile"


class GoogleOAuthClient:
    """Authorization-code flow for the browser redirect login."""

    def __init__(self, *, client_id: str, client_secret: str, redirect_url: str, timeout: float = 10.0) -> None:
        self._client_id = client_id
        self._client_secret = client_secret
        self._redirect_url = redirect_url
        self._timeout = timeout

    def _session(self) -> OAuth2Session:
        return OAuth2Session(
            client_id=self._client_id,
            client_secret=self._client_secret,
            scope=GOOGLE_SCOPES,
            redirect_uri=self._redirect_url,
        )

    def authorization_url(self, *, state: str) -> str:
        url, _ = self._session().create_authorization_url(
            GOOGLE_AUTHORIZE_URL,
            state=state,
            access_type="offline",
            prompt="consent",
        )
        return url

    def fetch_identity(self, *, code: str) -> GoogleIdentity:
        client = self._session()
        try:
            client.fetch_token(GOOGLE_TOKEN_URL, code=code, timeout=self._timeout)
            resp = client.get(GOOGLE_USERINFO_URL, timeout=self._timeout)
            resp.raise_for_status()
            info = resp.json()
        except (AuthlibBaseError, requests.RequestException, ValueError) as e:
            logger.warning("google_code_exchange_failed", reason=type(e).__name__)
            raise InvalidGoogleTokenError("Failed to exchange authorization code") from e

        email = (info.get("email") or "").strip().lower()
        if not email:
            raise InvalidGoogleTokenError("Google profile has no email")

        return GoogleIdentity(
            email=email,
            email_verified=bool(info.get("verified_email")),
            name=info.get("name") or None,
            subject=info.get("id"),
        )
