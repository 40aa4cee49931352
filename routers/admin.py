from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from starlette import status
from core.exceptions import ForbiddenError
from utils.deps import settings_dependency, user_service_dependency


router = APIRouter(
    prefix="/admin",
    tags=["admin"]
)

METRICS_TEMPLATE = """
<html>
  <body>
    <h1>Welcome, Chirpy Admin</h1>
    <p>Chirpy has been visited {hits} times!</p>
  </body>
</html>
"""


@router.get("/metrics", response_class=HTMLResponse)
async def metrics(request: Request):
    return METRICS_TEMPLATE.format(hits=request.app.state.hit_counter.hits)


@router.post("/reset", status_code=status.HTTP_200_OK)
async def reset(request: Request, settings: settings_dependency, users: user_service_dependency):
    """
    Delete every user and zero the hit counter. Development only.
    """
    if settings.PLATFORM != "dev":
        raise ForbiddenError("Reset is only allowed in dev environment")

    users.reset_users()
    request.app.state.hit_counter.reset()
    return {"message": "Reset complete"}
