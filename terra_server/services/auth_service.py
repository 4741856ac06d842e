# terra_server/services/auth_service.py

import hashlib
from urllib.parse import urlencode

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from terra_server.core.exceptions import (
    BadRequestError,
    EmailNotVerifiedError,
    EmailTakenError,
    InvalidCredentialsError,
    MalformedTokenError,
    NotAuthorizedError,
    PasswordMismatchError,
    TokenInvalidError,
    WrongMethodError,
    WrongPurposeError,
)
from terra_server.core.interfaces.email_sender import EmailSender
from terra_server.core.interfaces.google_identity import GoogleIdentity, GoogleIdentityVerifier
from terra_server.core.logging import get_logger
from terra_server.core.storage_errors import wraps_storage_errors
from terra_server.core.utils import new_id, utcnow
from terra_server.entities.user import AuthMethod, Role, User
from terra_server.infrastructure.database.models.refresh_token_model import RefreshTokenModel
from terra_server.infrastructure.database.models.user_model import UserModel
from terra_server.infrastructure.security.jwt_provider import JwtProvider, TokenPair, TokenPurpose
from terra_server.infrastructure.security.password_hasher import PasswordHasher
from terra_server.repositories.refresh_token_repository import RefreshTokenRepository
from terra_server.repositories.user_repository import UserRepository

logger = get_logger(__name__)

RESET_EMAIL_SUBJECT = "Password Reset Request"

RESET_EMAIL_TEMPLATE = """
<html>
<body>
<h2>Password Reset Request</h2>
<p>Hello {full_name},</p>
<p>You requested to reset your password. Click the link below to reset your password:</p>
<p><a href="{reset_link}">Reset Password</a></p>
<p>This link will expire in {minutes} minutes.</p>
<p>If you didn't request this, please ignore this email.</p>
<br>
<p>Best regards,<br>Terra Team</p>
</body>
</html>
"""


def _sha256(s: str) -> str:
    return hashlib.sha256(s.encode("utf-8")).hexdigest()


def _normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class AuthService:
    """Registration, login (email and Google), session tokens and password reset.

    The auth method of an account is fixed when it is created and decides
    which login path is valid for it: email accounts always carry a password
    hash, Google accounts never do.
    """

    def __init__(
        self,
        *,
        user_repo: UserRepository,
        refresh_repo: RefreshTokenRepository,
        jwt_provider: JwtProvider,
        password_hasher: PasswordHasher,
        google_verifier: GoogleIdentityVerifier,
        email_sender: EmailSender,
        reset_password_url: str,
        reset_token_minutes: int = 15,
    ) -> None:
        self._user_repo = user_repo
        self._refresh_repo = refresh_repo
        self._jwt = jwt_provider
        self._hasher = password_hasher
        self._google = google_verifier
        self._email_sender = email_sender
        self._reset_password_url = reset_password_url
        self._reset_token_minutes = reset_token_minutes

    # -------------------------
    # Registration / login
    # -------------------------

    @wraps_storage_errors("register user")
    def register(self, *, full_name: str, email: str, password: str) -> User:
        email = _normalize_email(email)
        full_name = (full_name or "").strip()
        if not email:
            raise BadRequestError("Email cannot be empty")
        if not full_name:
            raise BadRequestError("Full name cannot be empty")
        if not password or not password.strip():
            raise BadRequestError("The password cannot be empty")

        if self._user_repo.get_by_email(email) is not None:
            raise EmailTakenError()

        now = utcnow()
        model = UserModel(
            id=new_id(),
            full_name=full_name,
            email=email,
            password_hash=self._hasher.hash_password(password),
            role=Role.USER.value,
            auth_method=AuthMethod.EMAIL.value,
            created_at=now,
            updated_at=now,
        )
        try:
            self._user_repo.add(model)
        except IntegrityError as e:
            # lost a race against a concurrent registration of the same email
            raise EmailTakenError() from e

        logger.info("user_registered", user_id=model.id, auth_method=model.auth_method)
        return User.from_model(model)

    @wraps_storage_errors("log in")
    def login(self, *, email: str, password: str) -> TokenPair:
        user = self._user_repo.get_by_email(_normalize_email(email))
        if user is None:
            # same PBKDF2 cost as a wrong password
            self._hasher.verify_dummy(password)
            logger.info("login_failed", reason="unknown_email")
            raise InvalidCredentialsError()

        # Deliberately distinct from InvalidCredentials: the product tells the
        # user which login method the account uses.
        if user.auth_method == AuthMethod.GOOGLE.value:
            raise WrongMethodError("This account is registered with Google. Please use Google login")
        if user.auth_method != AuthMethod.EMAIL.value:
            raise WrongMethodError()

        if not self._hasher.verify_password(password, user.password_hash):
            logger.info("login_failed", reason="bad_password", user_id=user.id)
            raise InvalidCredentialsError()

        tokens = self._start_session(user)
        logger.info("login_succeeded", user_id=user.id)
        return tokens

    @wraps_storage_errors("log in with Google")
    def login_with_google(self, *, credential: str) -> TokenPair:
        identity = self._google.verify_credential(credential)
        _, tokens = self._login_google_identity(identity)
        return tokens

    @wraps_storage_errors("log in with Google")
    def login_with_google_profile(
        self, *, email: str, name: str | None, email_verified: bool
    ) -> tuple[User, TokenPair]:
        """Same policy as login_with_google for a profile fetched by the redirect flow."""
        identity = GoogleIdentity(email=email, email_verified=email_verified, name=name)
        return self._login_google_identity(identity)

    def _login_google_identity(self, identity: GoogleIdentity) -> tuple[User, TokenPair]:
        if not identity.email_verified:
            raise EmailNotVerifiedError()

        email = _normalize_email(identity.email)
        user = self._user_repo.get_by_email(email)

        if user is not None:
            if user.auth_method == AuthMethod.EMAIL.value:
                raise WrongMethodError("Please log in using email and password")
            if user.auth_method != AuthMethod.GOOGLE.value:
                raise WrongMethodError()
        else:
            now = utcnow()
            user = UserModel(
                id=new_id(),
                full_name=(identity.name or "").strip() or email,
                email=email,
                password_hash=None,
                role=Role.USER.value,
                auth_method=AuthMethod.GOOGLE.value,
                created_at=now,
                updated_at=now,
            )
            try:
                self._user_repo.add(user)
            except IntegrityError as e:
                raise EmailTakenError() from e
            logger.info("user_registered", user_id=user.id, auth_method=user.auth_method)

        tokens = self._start_session(user)
        logger.info("google_login_succeeded", user_id=user.id)
        return User.from_model(user), tokens

    def _start_session(self, user: UserModel) -> TokenPair:
        tokens = self._jwt.issue_access_and_refresh(user_id=user.id, role=user.role)
        claims = self._jwt.validate(tokens.refresh_token)

        self._refresh_repo.add(
            RefreshTokenModel(
                id=new_id(),
                user_id=user.id,
                token_hash=_sha256(tokens.refresh_token),
                jti=claims.jti,
                expires_at=claims.expires_at.replace(tzinfo=None),
                created_at=utcnow(),
                revoked_at=None,
                reason=None,
            )
        )
        return tokens

    # -------------------------
    # Session tokens
    # -------------------------

    @wraps_storage_errors("refresh token")
    def refresh_token(self, *, refresh_token: str) -> str:
        claims = self._jwt.validate(refresh_token)
        if claims.purpose != TokenPurpose.REFRESH.value:
            raise WrongPurposeError("Invalid token: not a refresh token")
        if not claims.user_id:
            raise TokenInvalidError()

        stored = self._refresh_repo.get_active_by_hash(_sha256(refresh_token), now=utcnow())
        if stored is None or stored.user_id != claims.user_id:
            raise TokenInvalidError("Token is invalid or has been revoked")

        return self._jwt.issue_access_token(user_id=claims.user_id, role=claims.role or Role.USER.value)

    @wraps_storage_errors("log out")
    def logout(self, *, refresh_token: str) -> None:
        claims = self._jwt.validate(refresh_token)
        if claims.purpose != TokenPurpose.REFRESH.value:
            raise WrongPurposeError("Invalid token: not a refresh token")

        revoked = self._refresh_repo.revoke_by_hash(_sha256(refresh_token), reason="logout")
        logger.info("logout", user_id=claims.user_id, revoked=revoked)

    # -------------------------
    # Password reset
    # -------------------------

    def forgot_password(self, *, email: str) -> None:
        """Always succeeds for the caller, whether or not a message was sent."""
        try:
            user = self._user_repo.get_by_email(_normalize_email(email))
        except SQLAlchemyError:
            logger.error("password_reset_lookup_failed", exc_info=True)
            return

        if user is None or user.auth_method != AuthMethod.EMAIL.value:
            logger.info("password_reset_skipped")
            return

        try:
            token = self._jwt.issue_reset_token(email=user.email)
            reset_link = f"{self._reset_password_url}?{urlencode({'token': token})}"
            body = RESET_EMAIL_TEMPLATE.format(
                full_name=user.full_name,
                reset_link=reset_link,
                minutes=self._reset_token_minutes,
            )
            self._email_sender.send_email(to=user.email, subject=RESET_EMAIL_SUBJECT, html_body=body)
        except Exception:
            # nothing may reach the caller here, or responses would reveal which emails exist
            logger.error("password_reset_email_failed", user_id=user.id, exc_info=True)
            return

        logger.info("password_reset_requested", user_id=user.id)

    @wraps_storage_errors("update password")
    def reset_password(self, *, token: str, password: str, confirm_password: str) -> None:
        if password != confirm_password:
            raise PasswordMismatchError()

        claims = self._jwt.validate(token)
        if claims.purpose != TokenPurpose.RESET_PASSWORD.value:
            raise WrongPurposeError()

        if not claims.email:
            raise MalformedTokenError()

        updated = self._user_repo.update_password_for_email_account(
            email=_normalize_email(claims.email),
            password_hash=self._hasher.hash_password(password),
        )
        if not updated:
            raise NotAuthorizedError()

        logger.info("password_reset_completed")
