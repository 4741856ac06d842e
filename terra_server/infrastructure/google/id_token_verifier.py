# terra_server/infrastructure/google/id_token_verifier.py

from __future__ import annotations

import google.auth.exceptions
import requests
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token

from terra_server.core.exceptions import InvalidGoogleTokenError
from terra_server.core.interfaces.google_identity import GoogleIdentity, GoogleIdentityVerifier
from terra_server.core.logging import get_logger

logger = get_logger(__name__)


class _TimeoutRequest(google_requests.Request):
    """google-auth transport whose certificate fetches never wait forever."""

    def __init__(self, *, timeout: float, session: requests.Session | None = None) -> None:
        super().__init__(session=session)
        self._timeout = timeout

    def __call__(self, url, method="GET", body=None, headers=None, timeout=None, **kwargs):
        return super().__call__(
            url,
            method=method,
            body=body,
            headers=headers,
            timeout=timeout or self._timeout,
            **kwargs,
        )


def _as_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


class GoogleIdTokenVerifier(GoogleIdentityVerifier):
    def __init__(self, *, client_id: str, timeout: float = 10.0) -> None:
        self._client_id = client_id
        self._request = _TimeoutRequest(timeout=timeout)

    def verify_credential(self, credential: str) -> GoogleIdentity:
        if not self._client_id:
            logger.error("google_client_id_not_configured")
            raise InvalidGoogleTokenError()

        try:
            info = id_token.verify_oauth2_token(credential, self._request, audience=self._client_id)
        except (ValueError, google.auth.exceptions.GoogleAuthError, requests.RequestException) as e:
            logger.info("google_token_rejected", reason=type(e).__name__)
            raise InvalidGoogleTokenError() from e

        # verify_oauth2_token already checks aud; re-check aud and azp against token substitution
        if info.get("aud") != self._client_id:
            raise InvalidGoogleTokenError("Token audience does not match")
        azp = info.get("azp")
        if azp is not None and azp != self._client_id:
            raise InvalidGoogleTokenError("Token was not issued to this client")

        email = (info.get("email") or "").strip().lower()
        if not email:
            raise InvalidGoogleTokenError("Google token has no email")

        return GoogleIdentity(
            email=email,
            email_verified=_as_bool(info.get("email_verified", False)),
            name=info.get("name") or None,
            subject=info.get("sub"),
        )
