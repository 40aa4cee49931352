import threading


class HitCounter:
    """
    Counts requests served from the static file server.

    One instance is created per application and stored on ``app.state``.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._hits = 0

    def increment(self) -> int:
        with self._lock:
            self._hits += 1
            return self._hits

    def reset(self):
        with self._lock:
            self._hits = 0

    @property
    def hits(self) -> int:
        with self._lock:
            return self._hits
