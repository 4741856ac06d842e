# terra_server/api/dependencies.py

from dataclasses import dataclass

from flask import Flask, current_app

from terra_server.config.settings import settings
from terra_server.core.interfaces.email_sender import EmailSender
from terra_server.core.interfaces.google_identity import GoogleIdentityVerifier
from terra_server.infrastructure.email.smtp_email_sender import SmtpEmailSender
from terra_server.infrastructure.google.id_token_verifier import GoogleIdTokenVerifier
from terra_server.infrastructure.google.oauth_client import GoogleOAuthClient
from terra_server.infrastructure.security.jwt_provider import JwtProvider
from terra_server.infrastructure.security.password_hasher import PasswordHasher

EXTENSION_KEY = "terra_server"


@dataclass
class Components:
    """Process-wide collaborators, built once and shared by every request."""

    jwt_provider: JwtProvider
    password_hasher: PasswordHasher
    google_verifier: GoogleIdentityVerifier
    google_oauth: GoogleOAuthClient
    email_sender: EmailSender


def build_components() -> Components:
    return Components(
        jwt_provider=JwtProvider(
            secret=settings.jwt_secret,
            access_minutes=settings.jwt_access_minutes,
            refresh_minutes=settings.jwt_refresh_minutes,
            reset_minutes=settings.jwt_reset_minutes,
        ),
        password_hasher=PasswordHasher(),
        google_verifier=GoogleIdTokenVerifier(
            client_id=settings.google_client_id,
            timeout=settings.google_http_timeout_seconds,
        ),
        google_oauth=GoogleOAuthClient(
            client_id=settings.google_client_id,
            client_secret=settings.google_client_secret,
            redirect_url=settings.google_redirect_url,
            timeout=settings.google_http_timeout_seconds,
        ),
        email_sender=SmtpEmailSender(
            host=settings.smtp_host,
            port=settings.smtp_port,
            user=settings.smtp_user,
            password=settings.smtp_password,
            sender_email=settings.smtp_sender_email,
            timeout=settings.smtp_timeout_seconds,
        ),
    )


def init_components(app: Flask, components: Components) -> None:
    app.extensions[EXTENSION_KEY] = components


def get_components() -> Components:
    return current_app.extensions[EXTENSION_KEY]
