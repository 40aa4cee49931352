from datetime import datetime, timezone, timedelta
from core.config import Settings
from core.exceptions import (InvalidCredentialsError, UserNotFoundError, InvalidRefreshTokenError,
                             PasswordMismatchError, InvalidLifetimeError)
from services.stores import UserStore, RefreshTokenStore
from services.token_service import AccessTokenCodec, make_refresh_token
from utils.hashing import check_password_hash
from utils.logger import get_logger, sanitize_log_data

logger = get_logger(__name__)


class SessionService:
    """
    Login, access token refresh and refresh token revocation.

    Login hands out a short-lived access token plus a long-lived refresh
    token. The refresh token stays valid until it expires or is revoked; it
    is not rotated on use.
    """

    def __init__(self, users: UserStore, refresh_tokens: RefreshTokenStore,
                 codec: AccessTokenCodec, refresh_token_lifetime: timedelta = timedelta(days=60)):
        self.users = users
        self.refresh_tokens = refresh_tokens
        self.codec = codec
        self.refresh_token_lifetime = refresh_token_lifetime

    @classmethod
    def from_settings(cls, users: UserStore, refresh_tokens: RefreshTokenStore,
                      settings: Settings) -> "SessionService":
        return cls(
            users=users,
            refresh_tokens=refresh_tokens,
            codec=AccessTokenCodec.from_settings(settings),
            refresh_token_lifetime=timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
        )

    def login(self, email: str, password: str, expires_in_seconds: int | None = None):
        """
        Authenticates a user and issues a token pair.

        Flow:
        1. Look up the user by email
        2. Verify the password
        3. Issue an access token (default lifetime unless one is requested)
        4. Issue and store a refresh token

        Returns:
            Dictionary with user, token and refresh_token

        Raises:
            UserNotFoundError: no user with this email
            InvalidCredentialsError: wrong password
            InvalidLifetimeError: requested lifetime cannot be represented
        """
        email = email.lower().strip()
        user = self.users.find_by_email(email)
        if not user:
            logger.warning("Login failed - user not found", extra={"email": email})
            raise UserNotFoundError()

        try:
            check_password_hash(password, user.hashed_password)
        except PasswordMismatchError:
            logger.warning(
                "Login failed - invalid password",
                extra={"user_id": str(user.id), "email": email}
            )
            raise InvalidCredentialsError()

        try:
            lifetime = timedelta(seconds=expires_in_seconds) if expires_in_seconds else None
        except OverflowError as exc:
            raise InvalidLifetimeError() from exc
        access_token = self.codec.issue(user.id, lifetime)

        refresh_token = make_refresh_token()
        self.refresh_tokens.save(
            refresh_token,
            user.id,
            datetime.now(timezone.utc) + self.refresh_token_lifetime,
        )

        logger.info("User logged in successfully", extra={"user_id": str(user.id)})

        return {
            "user": user,
            "token": access_token,
            "refresh_token": refresh_token,
        }

    def refresh(self, refresh_token: str):
        """
        Exchanges a refresh token for a new access token.

        Raises:
            InvalidRefreshTokenError: token is unknown, expired or revoked
        """
        db_token = self.refresh_tokens.find_active(refresh_token)
        if not db_token:
            logger.warning(
                "Refresh rejected - token unknown, expired or revoked",
                extra=sanitize_log_data({"refresh_token": refresh_token})
            )
            raise InvalidRefreshTokenError()

        access_token = self.codec.issue(db_token.user_id)
        logger.info("Access token refreshed", extra={"user_id": str(db_token.user_id)})
        return {"token": access_token}

    def revoke(self, refresh_token: str):
        self.refresh_tokens.revoke(refresh_token)
        logger.info("Refresh token revoked", extra=sanitize_log_data({"refresh_token": refresh_token}))

