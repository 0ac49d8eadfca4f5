# app/core/poller.py

import threading
import time
import structlog
from app.core import config


logger = structlog.get_logger()


class FeedSnapshot:
    """
    Latest feed result shared between the polling thread and the page.
    Each update replaces the whole list; the last result to arrive wins.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._posts = []
        self._error = None
        self._updated_at = None
        self._viewed_at = time.monotonic()

    def update(self, result):
        with self._lock:
            if isinstance(result, list):
                self._posts = result
                self._updated_at = time.monotonic()
            else:
                self._error = (result or {}).get("error", "Could not load posts.")

    def posts(self) -> list:
        with self._lock:
            return list(self._posts)

    def take_error(self):
        with self._lock:
            error, self._error = self._error, None
            return error

    @property
    def loaded(self) -> bool:
        return self._updated_at is not None

    def mark_viewed(self):
        with self._lock:
            self._viewed_at = time.monotonic()

    def viewed_within(self, seconds: float) -> bool:
        with self._lock:
            return time.monotonic() - self._viewed_at <= seconds


class FeedPoller:
    """
    Repeating feed refresh on a background thread.

    `start()` fetches once on the calling thread, then a background thread
    fetches every `interval` seconds until `stop()` is called or `keep_running()` turns
    false. A failing fetch is logged and the next tick still fires.
    Usable as a context manager so the thread is always stopped on exit.
    """

    def __init__(self, fetch, on_result, interval: float = config.POLL_INTERVAL, keep_running=None):
        self._fetch = fetch
        self._on_result = on_result
        self._interval = interval
        self._keep_running = keep_running or (lambda: True)
        self._stop_event = threading.Event()
        self._thread = None
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        with self._lock:
            if self.running:
                return self
            self._poll_once()
            self._stop_event = threading.Event()
            self._thread = threading.Thread(
                target=self._run, args=(self._stop_event,), name="feed-poller", daemon=True
            )
            self._thread.start()
            logger.debug("feed_poller_started", interval=self._interval)
        return self

    def stop(self, timeout: float | None = None):
        with self._lock:
            thread, self._thread = self._thread, None
            self._stop_event.set()
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout if timeout is not None else self._interval + 1)
            logger.debug("feed_poller_stopped")

    def refresh_now(self):
        """
        Fetches and publishes one result on the calling thread.
        """
        self._poll_once()

    def _run(self, stop_event: threading.Event):
        while not stop_event.wait(self._interval):
            if not self._keep_running():
                logger.debug("feed_poller_idle")
                break
            self._poll_once()

    def _poll_once(self):
        try:
            result = self._fetch()
        except Exception as e:
            logger.warning("feed_poll_failed", error=str(e))
            return
        self._on_result(result)

    def __enter__(self):
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.stop()
        return False
