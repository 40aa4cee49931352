import secrets
import hashlib
import uuid
from datetime import datetime, timezone, timedelta
from jose import jwt, JWTError, ExpiredSignatureError
from jose.exceptions import JWTClaimsError
from core.config import Settings
from core.exceptions import (InvalidSignatureError, TokenExpiredError, MalformedTokenError,
                             RandomnessSourceError, InvalidLifetimeError)
from utils.logger import get_logger

logger = get_logger(__name__)

REFRESH_TOKEN_BYTES = 32
REQUIRED_CLAIMS = ("iss", "sub", "iat", "exp")


class AccessTokenCodec:
    """
    Mints and verifies short-lived JWT access tokens.

    Tokens carry only the registered claims ``iss``, ``sub`` (the user's UUID),
    ``iat`` and ``exp``. Verification is stateless: signature and expiry are
    all that is checked.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", issuer: str = "chirpy",
                 default_lifetime: timedelta = timedelta(hours=1)):
        self._secret = secret
        self.algorithm = algorithm
        self.issuer = issuer
        self.default_lifetime = default_lifetime

    @classmethod
    def from_settings(cls, settings: Settings) -> "AccessTokenCodec":
        return cls(
            secret=settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
            issuer=settings.TOKEN_ISSUER,
            default_lifetime=timedelta(seconds=settings.ACCESS_TOKEN_EXPIRE_SECONDS),
        )

    def issue(self, user_id: uuid.UUID, lifetime: timedelta | None = None) -> str:
        """
        Creates a signed access token for ``user_id``.

        Args:
            user_id: The user's ID
            lifetime: How long the token is valid. None or zero means the
                default lifetime.

        Returns:
            Compact JWS string
        """
        if not lifetime:
            lifetime = self.default_lifetime

        now = datetime.now(timezone.utc)
        try:
            expires_at = now + lifetime
        except OverflowError as exc:
            raise InvalidLifetimeError() from exc

        payload = {
            "iss": self.issuer,
            "sub": str(user_id),
            "iat": now,
            "exp": expires_at,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> uuid.UUID:
        """
        Validates an access token and returns the user ID it was issued to.

        Raises:
            MalformedTokenError: not a JWT, missing or wrong claims, or subject
                is not a UUID
            InvalidSignatureError: signature does not match the secret
            TokenExpiredError: the token is past its ``exp``
        """
        try:
            claims = jwt.get_unverified_claims(token)
        except JWTError as exc:
            raise MalformedTokenError() from exc

        missing = [claim for claim in REQUIRED_CLAIMS if claim not in claims]
        if missing:
            logger.debug("Access token missing claims", extra={"missing_claims": missing})
            raise MalformedTokenError()

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                options={"require_iat": True, "require_exp": True, "require_sub": True},
            )
        except ExpiredSignatureError as exc:
            raise TokenExpiredError() from exc
        except JWTClaimsError as exc:
            raise MalformedTokenError() from exc
        except JWTError as exc:
            raise InvalidSignatureError() from exc

        try:
            return uuid.UUID(payload.get("sub") or "")
        except (ValueError, TypeError) as exc:
            raise MalformedTokenError() from exc


def make_refresh_token() -> str:
    """
    Generates an opaque refresh token: 32 random bytes, hex encoded.

    Raises:
        RandomnessSourceError: the OS random source is unavailable
    """
    try:
        return secrets.token_bytes(REFRESH_TOKEN_BYTES).hex()
    except (NotImplementedError, OSError) as exc:
        logger.critical("Random source unavailable", exc_info=True)
        raise RandomnessSourceError() from exc


def hash_refresh_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()
