import uuid
from fastapi import APIRouter, Request
from starlette import status
from schemas.chirp_schemas import ChirpRequest, ChirpResponse, ValidateChirpResponse
from services.chirp_service import ChirpService
from utils.censor import validate_chirp
from utils.deps import db_dependency, user_id_dependency
from middleware.rate_limiter import limiter


router = APIRouter(
    prefix="/api",
    tags=["chirps"]
)


@router.post("/validate_chirp", response_model=ValidateChirpResponse)
async def validate_chirp_body(body: ChirpRequest):
    """
    Check a chirp body without storing it.
    """
    return ValidateChirpResponse(cleaned_body=validate_chirp(body.body))


@router.post("/chirps", status_code=status.HTTP_201_CREATED, response_model=ChirpResponse)
@limiter.limit("30/minute")
async def create_chirp(request: Request, body: ChirpRequest, user_id: user_id_dependency, db: db_dependency):
    return ChirpService.create_chirp(body.body, user_id, db)


@router.get("/chirps", response_model=list[ChirpResponse])
async def get_chirps(db: db_dependency):
    return ChirpService.get_all_chirps(db)


@router.get("/chirps/{chirp_id}", response_model=ChirpResponse)
async def get_chirp(chirp_id: uuid.UUID, db: db_dependency):
    return ChirpService.get_chirp(chirp_id, db)
