# terra_server/api/middlewares/auth_middleware.py
from functools import wraps
from typing import Any, Callable, TypeVar

from flask import g, request

from terra_server.api.dependencies import get_components
from terra_server.core.exceptions import ForbiddenError, NotAuthorizedError, TokenInvalidError, WrongPurposeError
from terra_server.infrastructure.security.jwt_provider import TokenClaims, TokenPurpose

F = TypeVar("F", bound=Callable[..., Any])


def _get_bearer_token() -> str:
    auth = request.headers.get("Authorization", "")
    parts = auth.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    raise NotAuthorizedError("Authorization header is required")


def current_claims() -> TokenClaims:
    claims = getattr(g, "auth", None)
    if claims is None:
        raise NotAuthorizedError("Authorization header is required")
    return claims


def require_auth(fn: F) -> F:
    @wraps(fn)
    def wrapper(*args, **kwargs):
        token = _get_bearer_token()
        claims = get_components().jwt_provider.validate(token)

        if claims.purpose != TokenPurpose.ACCESS.value:
            raise WrongPurposeError("Invalid token: not an access token")
        if not claims.user_id:
            raise TokenInvalidError()

        g.auth = claims
        return fn(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def require_roles(*allowed_roles: str):
    def decorator(fn: F) -> F:
        @wraps(fn)
        def wrapper(*args, **kwargs):
            claims = current_claims()
            if claims.role not in set(allowed_roles):
                raise ForbiddenError("Access denied")

            return fn(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator
