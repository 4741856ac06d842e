# terra_server/api/routes/google_oauth_routes.py
import hmac
import secrets

from flask import Blueprint, after_this_request, jsonify, redirect, request

from terra_server.api.dependencies import get_components
from terra_server.api.routes.auth_routes import build_auth_service
from terra_server.api.schemas.user_schema import GoogleCallbackResponse, UserResponse
from terra_server.config.settings import settings
from terra_server.core.exceptions import BadRequestError
from terra_server.infrastructure.database.session import db_session

bp_google_oauth = Blueprint("google_oauth", __name__, url_prefix="/auth/google")

STATE_COOKIE = "oauth_state"
STATE_MAX_AGE_SECONDS = 600


@bp_google_oauth.get("/login")
def google_login():
    state = secrets.token_urlsafe(32)
    url = get_components().google_oauth.authorization_url(state=state)

    response = redirect(url, code=307)
    response.set_cookie(
        STATE_COOKIE,
        state,
        max_age=STATE_MAX_AGE_SECONDS,
        httponly=True,
        secure=not settings.debug,
        samesite="Lax",
    )
    return response


@bp_google_oauth.get("/callback")
def google_callback():
    # the state cookie is single use, whatever the outcome
    @after_this_request
    def _clear_state(response):
        response.delete_cookie(STATE_COOKIE)
        return response

    state = request.args.get("state", "")
    expected = request.cookies.get(STATE_COOKIE, "")
    if not state or not expected or not hmac.compare_digest(state, expected):
        raise BadRequestError("Invalid OAuth state")

    code = request.args.get("code", "")
    if not code:
        raise BadRequestError("No authorization code received from Google")

    identity = get_components().google_oauth.fetch_identity(code=code)

    with db_session() as session:
        user, tokens = build_auth_service(session).login_with_google_profile(
            email=identity.email,
            name=identity.name,
            email_verified=identity.email_verified,
        )

    response = GoogleCallbackResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        user=UserResponse.model_validate(user),
    )
    return jsonify({"data": response.model_dump(mode="json")}), 200
