from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from core.metrics import HitCounter


class FileserverMetricsMiddleware(BaseHTTPMiddleware):
    """
    Counts every request under ``path_prefix`` on the app's HitCounter.
    """

    def __init__(self, app, counter: HitCounter, path_prefix: str = "/app"):
        super().__init__(app)
        self.counter = counter
        self.path_prefix = path_prefix

    async def dispatch(self, request: Request, call_next):
        if request.url.path == self.path_prefix or request.url.path.startswith(self.path_prefix + "/"):
            self.counter.increment()
        return await call_next(request)
