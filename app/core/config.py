# app/core/config.py

import os
from dotenv import load_dotenv


load_dotenv()


API_URL = os.getenv("IFSOCIAL_API_URL", "http://localhost:8080").rstrip("/")

# seconds between feed refreshes
POLL_INTERVAL = float(os.getenv("IFSOCIAL_POLL_INTERVAL", "2"))

REQUEST_TIMEOUT = float(os.getenv("IFSOCIAL_REQUEST_TIMEOUT", "5"))

COOKIE_PREFIX = "ifsocial_"
COOKIE_PASSWORD = os.getenv("COOKIE_PASSWORD", "change-me")
