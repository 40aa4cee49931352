from fastapi import APIRouter, Request, Response
from starlette import status
from schemas.auth_schemas import LoginRequest, LoginResponse, TokenResponse
from utils.deps import session_service_dependency, bearer_dependency
from middleware.rate_limiter import limiter
from utils.logger import get_logger

logger = get_logger(__name__)


router = APIRouter(
    prefix="/api",
    tags=["auth"]
)


@router.post("/login", response_model=LoginResponse)
@limiter.limit("5/minute")
async def login(request: Request, body: LoginRequest, sessions: session_service_dependency):
    """
    Exchange email and password for an access token and a refresh token.
    """
    result = sessions.login(body.email, body.password, body.expires_in_seconds)
    user = result["user"]

    return LoginResponse(
        id=user.id,
        created_at=user.created_at,
        updated_at=user.updated_at,
        email=user.email,
        is_chirpy_red=user.is_chirpy_red,
        token=result["token"],
        refresh_token=result["refresh_token"],
    )


@router.post("/refresh", response_model=TokenResponse)
@limiter.limit("10/minute")
async def refresh_token(request: Request, token: bearer_dependency, sessions: session_service_dependency):
    """
    Get a new access token using the refresh token in the Authorization header.
    """
    return sessions.refresh(token)


@router.post("/revoke", status_code=status.HTTP_204_NO_CONTENT)
@limiter.limit("10/minute")
async def revoke_token(request: Request, token: bearer_dependency, sessions: session_service_dependency):
    """
    Revoke the refresh token in the Authorization header. Revoking an
    unknown or already revoked token still succeeds.
    """
    sessions.revoke(token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
