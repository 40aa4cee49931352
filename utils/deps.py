import uuid
from typing import Annotated
from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session
from core.config import Settings, get_settings
from core.database import SessionLocal
from core.exceptions import MissingHeaderError, TokenError
from services.auth_service import SessionService
from services.stores import UserStore, RefreshTokenStore
from services.token_service import AccessTokenCodec
from services.user_service import UserService
from utils.logger import get_logger

logger = get_logger(__name__)

BEARER_PREFIX = "Bearer "


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

db_dependency = Annotated[Session, Depends(get_db)]
settings_dependency = Annotated[Settings, Depends(get_settings)]


def extract_bearer_token(header_value: str | None) -> str:
    """
    Pull the credential out of an Authorization header value.

    The "Bearer " prefix is stripped when present but not required, so a bare
    token is accepted as well.

    Raises:
        MissingHeaderError: header absent or empty
    """
    if not header_value:
        raise MissingHeaderError()
    return header_value.removeprefix(BEARER_PREFIX)


def get_bearer_token(authorization: Annotated[str | None, Header()] = None) -> str:
    return extract_bearer_token(authorization)

bearer_dependency = Annotated[str, Depends(get_bearer_token)]


def get_token_codec(settings: settings_dependency) -> AccessTokenCodec:
    return AccessTokenCodec.from_settings(settings)

codec_dependency = Annotated[AccessTokenCodec, Depends(get_token_codec)]


def get_session_service(db: db_dependency, settings: settings_dependency) -> SessionService:
    return SessionService.from_settings(UserStore(db), RefreshTokenStore(db), settings)

session_service_dependency = Annotated[SessionService, Depends(get_session_service)]


def get_user_service(db: db_dependency) -> UserService:
    return UserService(UserStore(db))

user_service_dependency = Annotated[UserService, Depends(get_user_service)]


def get_current_user_id(request: Request, token: bearer_dependency, codec: codec_dependency) -> uuid.UUID:
    try:
        user_id = codec.verify(token)
    except TokenError as exc:
        logger.warning(
            "Access token rejected",
            extra={"reason": type(exc).__name__, "path": request.url.path}
        )
        raise

    request.state.user_id = user_id
    return user_id

user_id_dependency = Annotated[uuid.UUID, Depends(get_current_user_id)]
