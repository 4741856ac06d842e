"""Shared fixtures.

The engine is built from settings at import time, so the environment is set
before anything from terra_server is imported.
"""

import os

os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["GOOGLE_CLIENT_ID"] = "test-client.apps.googleusercontent.com"
os.environ["FRONTEND_BASE_URL"] = "http://frontend.example.com"
os.environ["DEBUG"] = "false"

import pytest  # noqa: E402

from terra_server.api.dependencies import Components  # noqa: E402
from terra_server.config.settings import settings  # noqa: E402
from terra_server.core.exceptions import InvalidGoogleTokenError  # noqa: E402
from terra_server.core.interfaces.google_identity import GoogleIdentity  # noqa: E402
from terra_server.core.utils import new_id, utcnow  # noqa: E402
from terra_server.entities.user import AuthMethod, Role  # noqa: E402
from terra_server.infrastructure.database.models import ProgramModel, UserModel  # noqa: E402
from terra_server.infrastructure.database.session import create_all, db_session, drop_all  # noqa: E402
from terra_server.infrastructure.security.jwt_provider import JwtProvider  # noqa: E402
from terra_server.infrastructure.security.password_hasher import PasswordHasher  # noqa: E402
from terra_server.main import create_app  # noqa: E402
from terra_server.repositories.refresh_token_repository import RefreshTokenRepository  # noqa: E402
from terra_server.repositories.user_repository import UserRepository  # noqa: E402
from terra_server.services.auth_service import AuthService  # noqa: E402

TEST_SECRET = "test-secret"


# =============================================================================
# Fakes
# =============================================================================


class FakeGoogleVerifier:
    """Maps credential strings to identities; anything else is rejected."""

    def __init__(self) -> None:
        self.identities: dict[str, GoogleIdentity] = {}

    def add(self, credential: str, *, email: str, email_verified: bool = True, name: str | None = None) -> None:
        self.identities[credential] = GoogleIdentity(email=email, email_verified=email_verified, name=name)

    def verify_credential(self, credential: str) -> GoogleIdentity:
        try:
            return self.identities[credential]
        except KeyError:
            raise InvalidGoogleTokenError() from None


class RecordingEmailSender:
    def __init__(self) -> None:
        self.sent: list[dict] = []
        self.error: Exception | None = None

    def send_email(self, *, to: str, subject: str, html_body: str) -> None:
        if self.error is not None:
            raise self.error
        self.sent.append({"to": to, "subject": subject, "html_body": html_body})


class FakeGoogleOAuth:
    def __init__(self) -> None:
        self.identity: GoogleIdentity | None = None
        self.codes: list[str] = []

    def authorization_url(self, *, state: str) -> str:
        return f"https://accounts.google.com/o/oauth2/v2/auth?state={state}"

    def fetch_identity(self, *, code: str) -> GoogleIdentity:
        self.codes.append(code)
        if self.identity is None:
            raise InvalidGoogleTokenError("Failed to exchange authorization code")
        return self.identity


# =============================================================================
# Database
# =============================================================================


@pytest.fixture(autouse=True)
def database():
    """Fresh schema for every test."""
    create_all()
    yield
    drop_all()


@pytest.fixture
def session():
    with db_session() as s:
        yield s


# =============================================================================
# Collaborators
# =============================================================================


@pytest.fixture
def jwt_provider():
    return JwtProvider(secret=TEST_SECRET)


@pytest.fixture
def password_hasher():
    # low iteration count keeps the suite fast
    return PasswordHasher(iterations=1_000)


@pytest.fixture
def google_verifier():
    return FakeGoogleVerifier()


@pytest.fixture
def email_sender():
    return RecordingEmailSender()


@pytest.fixture
def google_oauth():
    return FakeGoogleOAuth()


@pytest.fixture
def auth_service(session, jwt_provider, password_hasher, google_verifier, email_sender):
    return AuthService(
        user_repo=UserRepository(session),
        refresh_repo=RefreshTokenRepository(session),
        jwt_provider=jwt_provider,
        password_hasher=password_hasher,
        google_verifier=google_verifier,
        email_sender=email_sender,
        reset_password_url=settings.reset_password_url,
    )


# =============================================================================
# HTTP
# =============================================================================


@pytest.fixture
def components(jwt_provider, password_hasher, google_verifier, google_oauth, email_sender):
    return Components(
        jwt_provider=jwt_provider,
        password_hasher=password_hasher,
        google_verifier=google_verifier,
        google_oauth=google_oauth,
        email_sender=email_sender,
    )


@pytest.fixture
def app(components):
    app = create_app(components)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


# =============================================================================
# Data helpers
# =============================================================================


def add_user(session, *, email: str, role: str = Role.USER.value, auth_method: str = AuthMethod.EMAIL.value,
             password_hash: str | None = None) -> UserModel:
    now = utcnow()
    model = UserModel(
        id=new_id(),
        full_name=email.split("@")[0],
        email=email,
        password_hash=password_hash,
        role=role,
        auth_method=auth_method,
        created_at=now,
        updated_at=now,
    )
    session.add(model)
    session.flush()
    return model


def add_program(session, *, title: str = "Clean Water", target_amount: float = 1000.0) -> ProgramModel:
    now = utcnow()
    model = ProgramModel(
        id=new_id(),
        title=title,
        description="Wells and filtration",
        image_url=None,
        target_amount=target_amount,
        created_at=now,
        updated_at=now,
    )
    session.add(model)
    session.flush()
    return model


@pytest.fixture
def make_user():
    """Insert a user in its own committed transaction (for HTTP tests)."""

    def _make(**kwargs) -> str:
        with db_session() as s:
            return add_user(s, **kwargs).id

    return _make


@pytest.fixture
def make_program():
    def _make(**kwargs) -> str:
        with db_session() as s:
            return add_program(s, **kwargs).id

    return _make


@pytest.fixture
def admin_headers(make_user, jwt_provider):
    admin_id = make_user(email="admin@example.com", role=Role.ADMIN.value)
    token = jwt_provider.issue_access_token(user_id=admin_id, role=Role.ADMIN.value)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_auth(make_user, jwt_provider):
    """(user_id, headers) for a regular user."""
    user_id = make_user(email="member@example.com")
    token = jwt_provider.issue_access_token(user_id=user_id, role=Role.USER.value)
    return user_id, {"Authorization": f"Bearer {token}"}
