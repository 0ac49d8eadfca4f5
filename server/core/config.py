# server/core/config.py

import os
from dotenv import load_dotenv


load_dotenv()


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _list_env(name: str, default: str) -> list[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


DATABASE_URL = os.getenv("IFSOCIAL_DATABASE_URL", "sqlite:///./data/ifsocial.db")

# "plaintext" keeps stored passwords verbatim, "argon2" hashes them
CREDENTIAL_SCHEME = os.getenv("IFSOCIAL_CREDENTIAL_SCHEME", "plaintext")

# When on, a failing feed query is answered with [] instead of a 500
FEED_DEGRADED_EMPTY = _bool_env("IFSOCIAL_FEED_DEGRADED_EMPTY", True)

ALLOWED_ORIGINS = _list_env("IFSOCIAL_ALLOWED_ORIGINS", "*")

LOG_LEVEL = os.getenv("IFSOCIAL_LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("IFSOCIAL_LOG_FORMAT", "console")

HOST = os.getenv("IFSOCIAL_HOST", "0.0.0.0")
PORT = int(os.getenv("IFSOCIAL_PORT", "8080"))
