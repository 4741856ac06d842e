# terra_server/api/routes/auth_routes.py
from flask import Blueprint, jsonify, request
from sqlalchemy.orm import Session

from terra_server.api.dependencies import get_components
from terra_server.api.schemas.auth_schema import (
    AccessTokenResponse,
    ForgotPasswordRequest,
    GoogleLoginRequest,
    LoginRequest,
    LogoutRequest,
    RefreshRequest,
    RegisterRequest,
    ResetPasswordRequest,
    TokenPairResponse,
)
from terra_server.api.schemas.user_schema import UserResponse
from terra_server.config.settings import settings
from terra_server.infrastructure.database.session import db_session
from terra_server.repositories.refresh_token_repository import RefreshTokenRepository
from terra_server.repositories.user_repository import UserRepository
from terra_server.services.auth_service import AuthService

bp_auth = Blueprint("auth", __name__, url_prefix="/auth")


def build_auth_service(session: Session) -> AuthService:
    components = get_components()
    return AuthService(
        user_repo=UserRepository(session),
        refresh_repo=RefreshTokenRepository(session),
        jwt_provider=components.jwt_provider,
        password_hasher=components.password_hasher,
        google_verifier=components.google_verifier,
        email_sender=components.email_sender,
        reset_password_url=settings.reset_password_url,
        reset_token_minutes=settings.jwt_reset_minutes,
    )


@bp_auth.post("/register")
def register():
    payload = RegisterRequest.model_validate(request.get_json(force=True))

    with db_session() as session:
        user = build_auth_service(session).register(**payload.model_dump())

    return jsonify({"data": UserResponse.model_validate(user).model_dump(mode="json")}), 201


@bp_auth.post("/login")
def login():
    payload = LoginRequest.model_validate(request.get_json(force=True))

    with db_session() as session:
        tokens = build_auth_service(session).login(email=payload.email, password=payload.password)

    response = TokenPairResponse(access_token=tokens.access_token, refresh_token=tokens.refresh_token)
    return jsonify({"data": response.model_dump()}), 200


@bp_auth.post("/login/google")
def login_google():
    payload = GoogleLoginRequest.model_validate(request.get_json(force=True))

    with db_session() as session:
        tokens = build_auth_service(session).login_with_google(credential=payload.credential)

    response = TokenPairResponse(access_token=tokens.access_token, refresh_token=tokens.refresh_token)
    return jsonify({"data": response.model_dump()}), 200


@bp_auth.post("/refresh")
def refresh():
    payload = RefreshRequest.model_validate(request.get_json(force=True))

    with db_session() as session:
        access = build_auth_service(session).refresh_token(refresh_token=payload.refresh_token)

    return jsonify({"data": AccessTokenResponse(access_token=access).model_dump()}), 200


@bp_auth.post("/logout")
def logout():
    payload = LogoutRequest.model_validate(request.get_json(force=True))

    with db_session() as session:
        build_auth_service(session).logout(refresh_token=payload.refresh_token)

    return jsonify({"message": "Logged out successfully"}), 200


@bp_auth.post("/forgot-password")
def forgot_password():
    payload = ForgotPasswordRequest.model_validate(request.get_json(force=True))

    with db_session() as session:
        build_auth_service(session).forgot_password(email=payload.email)

    return jsonify({"message": "If the email is registered, a password reset link has been sent"}), 200


@bp_auth.post("/reset-password")
def reset_password():
    payload = ResetPasswordRequest.model_validate(request.get_json(force=True))

    with db_session() as session:
        build_auth_service(session).reset_password(**payload.model_dump())

    return jsonify({"message": "Password has been reset successfully"}), 200
