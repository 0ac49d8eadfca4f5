# app/core/storage.py

import json
import time
import structlog
from app.core.session import Identity


logger = structlog.get_logger()

CURRENT_USER_KEY = "current_user"
DARK_MODE_KEY = "dark_mode"
HEALTH_KEY = "health"


class ClientStore:
    """
    Durable client-side state kept in a cookie mapping.

    `cookies` is any string-to-string mutable mapping (the encrypted cookie
    manager in the browser, a dict in tests). Writes are batched until
    `flush()`, which calls `save` at most once per batch.
    """

    def __init__(self, cookies, save=None):
        self._cookies = cookies
        self._save = save or (lambda: None)
        self._dirty = False

    def flush(self):
        if self._dirty:
            self._save()
            self._dirty = False

    def _read_json(self, key):
        raw = self._cookies.get(key)
        if not raw:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("client_state_corrupt", key=key)
            return None

    def _write_json(self, key, value):
        self._cookies[key] = json.dumps(value)
        self._dirty = True

    # identity

    def load_identity(self) -> Identity | None:
        return Identity.from_payload(self._read_json(CURRENT_USER_KEY))

    def save_identity(self, identity: Identity):
        self._write_json(CURRENT_USER_KEY, identity.to_payload())

    def clear_identity(self):
        if CURRENT_USER_KEY in self._cookies:
            del self._cookies[CURRENT_USER_KEY]
            self._dirty = True

    # preferences

    @property
    def dark_mode(self) -> bool:
        return self._cookies.get(DARK_MODE_KEY) == "true"

    def set_dark_mode(self, enabled: bool):
        self._cookies[DARK_MODE_KEY] = "true" if enabled else "false"
        self._dirty = True

    # server health

    def record_health(self, ok: bool, timestamp: int | None = None):
        stamp = timestamp if timestamp is not None else int(time.time() * 1000)
        self._write_json(HEALTH_KEY, {"ok": bool(ok), "timestamp": stamp})

    def last_health(self):
        return self._read_json(HEALTH_KEY)
