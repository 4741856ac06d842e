# terra_server/core/exceptions.py

from enum import Enum


class ErrorCode(str, Enum):
    EMAIL_TAKEN = "email_taken"
    INVALID_CREDENTIALS = "invalid_credentials"
    WRONG_METHOD = "wrong_method"
    INVALID_GOOGLE_TOKEN = "invalid_google_token"
    EMAIL_NOT_VERIFIED = "email_not_verified"
    TOKEN_INVALID = "token_invalid"
    WRONG_PURPOSE = "wrong_purpose"
    MALFORMED_TOKEN = "malformed_token"
    PASSWORD_MISMATCH = "password_mismatch"
    NOT_AUTHORIZED = "not_authorized"
    VALIDATION = "validation_error"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


# single source of truth for the HTTP layer
STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.EMAIL_TAKEN: 409,
    ErrorCode.INVALID_CREDENTIALS: 401,
    ErrorCode.WRONG_METHOD: 400,
    ErrorCode.INVALID_GOOGLE_TOKEN: 401,
    ErrorCode.EMAIL_NOT_VERIFIED: 401,
    ErrorCode.TOKEN_INVALID: 401,
    ErrorCode.WRONG_PURPOSE: 401,
    ErrorCode.MALFORMED_TOKEN: 401,
    ErrorCode.PASSWORD_MISMATCH: 400,
    ErrorCode.NOT_AUTHORIZED: 401,
    ErrorCode.VALIDATION: 400,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.CONFLICT: 409,
    ErrorCode.INTERNAL: 500,
}


class AppError(Exception):
    code: ErrorCode = ErrorCode.INTERNAL
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def status_code(self) -> int:
        return STATUS_BY_CODE[self.code]

    def to_dict(self) -> dict:
        return {"error": self.code.value, "message": str(self)}


class EmailTakenError(AppError):
    code = ErrorCode.EMAIL_TAKEN
    default_message = "Email is already registered"


class InvalidCredentialsError(AppError):
    code = ErrorCode.INVALID_CREDENTIALS
    default_message = "Email or password is incorrect"


class WrongMethodError(AppError):
    code = ErrorCode.WRONG_METHOD
    default_message = "Invalid authentication method"


class InvalidGoogleTokenError(AppError):
    code = ErrorCode.INVALID_GOOGLE_TOKEN
    default_message = "Invalid Google token"


class EmailNotVerifiedError(AppError):
    code = ErrorCode.EMAIL_NOT_VERIFIED
    default_message = "Your Google email is not verified"


class TokenInvalidError(AppError):
    code = ErrorCode.TOKEN_INVALID
    default_message = "Invalid or expired token"


class WrongPurposeError(AppError):
    code = ErrorCode.WRONG_PURPOSE
    default_message = "Invalid token purpose"


class MalformedTokenError(AppError):
    code = ErrorCode.MALFORMED_TOKEN
    default_message = "Invalid token: missing email"


class PasswordMismatchError(AppError):
    code = ErrorCode.PASSWORD_MISMATCH
    default_message = "Passwords do not match"


class NotAuthorizedError(AppError):
    code = ErrorCode.NOT_AUTHORIZED
    default_message = "User not found or not authorized"


class BadRequestError(AppError):
    code = ErrorCode.VALIDATION
    default_message = "Invalid request"


class ForbiddenError(AppError):
    code = ErrorCode.FORBIDDEN
    default_message = "Forbidden"


class NotFoundError(AppError):
    code = ErrorCode.NOT_FOUND
    default_message = "Resource not found"


class ConflictError(AppError):
    code = ErrorCode.CONFLICT
    default_message = "Conflict"


class InternalError(AppError):
    code = ErrorCode.INTERNAL
    default_message = "Internal server error"
