import secrets
from typing import Annotated
from fastapi import APIRouter, Depends, Header, Response
from starlette import status
from core.exceptions import InvalidApiKeyError
from schemas.webhook_schemas import PolkaEvent
from utils.deps import settings_dependency, user_service_dependency
from utils.logger import get_logger

logger = get_logger(__name__)

API_KEY_PREFIX = "ApiKey "
UPGRADE_EVENT = "user.upgraded"


router = APIRouter(
    prefix="/api/polka",
    tags=["webhooks"]
)


def require_polka_key(settings: settings_dependency, authorization: Annotated[str | None, Header()] = None):
    """
    When a Polka key is configured, require ``Authorization: ApiKey <key>``.

    Runs as a route dependency so unauthenticated callers get a 401 before
    the event body is validated.
    """
    expected = settings.POLKA_KEY
    if not expected:
        return

    if not authorization or not authorization.startswith(API_KEY_PREFIX):
        logger.warning("Polka webhook rejected - missing API key")
        raise InvalidApiKeyError()

    if not secrets.compare_digest(authorization.removeprefix(API_KEY_PREFIX), expected):
        logger.warning("Polka webhook rejected - wrong API key")
        raise InvalidApiKeyError()


@router.post("/webhooks", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_polka_key)])
async def polka_webhook(event: PolkaEvent, users: user_service_dependency):
    """
    Receive payment events from Polka. Only ``user.upgraded`` has an effect;
    anything else is acknowledged and ignored.
    """
    if event.event != UPGRADE_EVENT:
        logger.debug("Ignoring Polka event", extra={"event": event.event})
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    users.upgrade_to_red(event.data.user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
