from fastapi import APIRouter, Request
from starlette import status
from schemas.auth_schemas import CreateUserRequest, UserResponse
from utils.deps import user_service_dependency
from middleware.rate_limiter import limiter


router = APIRouter(
    prefix="/api/users",
    tags=["users"]
)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=UserResponse)
@limiter.limit("3/minute")
async def create_user(request: Request, body: CreateUserRequest, users: user_service_dependency):
    return users.create_user(body.email, body.password)
