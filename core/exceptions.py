"""
Domain errors raised by the service layer.

Each error carries the HTTP status and the client-facing message it maps to.
The message is deliberately generic; the specific reason is only logged.
"""

from starlette import status


class ChirpyError(Exception):
    """Base error for everything the API reports to clients."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Something went wrong"

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


# Input errors

class InvalidLifetimeError(ChirpyError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Requested token lifetime is out of range"


class ChirpTooLongError(ChirpyError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Chirp is too long"


class EmailAlreadyRegisteredError(ChirpyError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Email already registered"


# Authentication errors

class AuthError(ChirpyError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Unauthorized"


class MissingHeaderError(AuthError):
    detail = "Authorization header missing"


class TokenError(AuthError):
    """Access token could not be validated."""

    detail = "Invalid or expired token"


class InvalidSignatureError(TokenError):
    pass


class TokenExpiredError(TokenError):
    pass


class MalformedTokenError(TokenError):
    pass


class InvalidCredentialsError(AuthError):
    detail = "Incorrect email or password"


class UserNotFoundError(InvalidCredentialsError):
    """
    Login with an unknown email.

    Shares status and message with InvalidCredentialsError so a caller
    cannot tell which emails are registered.
    """


class InvalidRefreshTokenError(AuthError):
    """Refresh token is unknown, expired or revoked."""

    detail = "Invalid refresh token"


class InvalidApiKeyError(AuthError):
    detail = "Invalid API key"


# Password hash errors (never reach the client directly)

class PasswordMismatchError(ChirpyError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Incorrect email or password"


class MalformedHashError(ChirpyError):
    pass


# Not found

class NotFoundError(ChirpyError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Not found"


class ChirpNotFoundError(NotFoundError):
    detail = "Chirp not found"


class UserMissingError(NotFoundError):
    detail = "User not found"


# Infrastructure

class RandomnessSourceError(ChirpyError):
    pass


class ForbiddenError(ChirpyError):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "Forbidden"
