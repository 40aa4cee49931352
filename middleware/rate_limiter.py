from slowapi import Limiter
from slowapi.util import get_remote_address
from fastapi import Request
from core.config import get_settings
from core.exceptions import ChirpyError
from services.token_service import AccessTokenCodec
from utils.deps import extract_bearer_token


def get_user_id(request: Request) -> str:
    """
    Rate limit key: the access token's user ID when the request carries a
    valid one, otherwise the client address.
    """
    header = request.headers.get("Authorization")
    if header:
        try:
            token = extract_bearer_token(header)
            return str(AccessTokenCodec.from_settings(get_settings()).verify(token))
        except ChirpyError:
            pass

    return get_remote_address(request)

limiter = Limiter(
    key_func=get_user_id,
    default_limits=["200/hour"],
    enabled=get_settings().ENV != "testing"
)
