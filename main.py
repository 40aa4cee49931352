import time
from pathlib import Path
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles

# Import all models so Base.metadata knows every table
import models
from core.database import Base, engine
from core.config import get_settings
from core.exceptions import ChirpyError
from core.logging_config import setup_logging, get_logger
from core.metrics import HitCounter
from routers import admin, auth, chirps, users, webhooks
from utils.logger import log_request

# Rate limiter
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from middleware import RequestIDMiddleware, FileserverMetricsMiddleware, get_request_id, limiter

settings = get_settings()

setup_logging(
    log_level=settings.LOG_LEVEL,
    log_dir=settings.LOG_DIR
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    logger.info("Application startup complete", extra={"event": "startup", "platform": settings.PLATFORM})
    yield
    logger.info("Application shutting down", extra={"event": "shutdown"})


app = FastAPI(
    title="Chirpy API",
    description="Backend API for the Chirpy social network",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

app.state.hit_counter = HitCounter()


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    duration = (time.time() - start_time) * 1000

    # log_request redacts the credential values
    extra = {}
    user_id = getattr(request.state, "user_id", None)
    if user_id:
        extra["user_id"] = str(user_id)
    if "authorization" in request.headers:
        extra["authorization"] = request.headers["authorization"]

    log_request(
        logger,
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=duration,
        client_ip=request.client.host if request.client else "unknown",
        extra=extra
    )
    return response


app.add_middleware(FileserverMetricsMiddleware, counter=app.state.hit_counter)
# Added last so it wraps everything above and request IDs reach every log line
app.add_middleware(RequestIDMiddleware)


@app.get("/api/healthz", response_class=PlainTextResponse)
async def health_check():
    logger.debug("Health check requested")
    return "OK"


@app.exception_handler(ChirpyError)
async def chirpy_exception_handler(request: Request, exc: ChirpyError):
    """
    Render domain errors as ``{"detail": ...}``.

    5xx errors are logged with their stack trace and always get a generic
    message.
    """
    if exc.status_code >= 500:
        logger.error(
            f"Request failed: {type(exc).__name__}",
            extra={
                "path": request.url.path,
                "method": request.method,
                "error_type": type(exc).__name__,
                "request_id": get_request_id(request)
            },
            exc_info=exc
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": "Internal server error"}
        )

    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Same shape as FastAPI's default 422 body, minus the submitted values,
    so passwords never come back in an error response.
    """
    errors = [
        {key: value for key, value in error.items() if key not in ("input", "ctx", "url")}
        for error in exc.errors()
    ]
    return JSONResponse(status_code=422, content={"detail": errors})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(
        f"Unhandled exception: {type(exc).__name__}",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_type": type(exc).__name__,
            "request_id": get_request_id(request)
        },
        exc_info=exc
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"}
    )


app.include_router(auth.router)
app.include_router(users.router)
app.include_router(chirps.router)
app.include_router(webhooks.router)
app.include_router(admin.router)

app.mount(
    "/app",
    StaticFiles(directory=Path(settings.FILESERVER_ROOT), html=True, check_dir=False),
    name="app"
)


app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
# Applies the limiter default limits to routes without their own @limiter.limit
app.add_middleware(SlowAPIMiddleware)
