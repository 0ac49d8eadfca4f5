# app/services/api.py

import requests
import structlog
from app.core import config


logger = structlog.get_logger()

CONNECTION_ERROR = "Could not connect to the server."


def _url(path):
    return f"{config.API_URL}{path}"


def _error_from(res, fallback):
    try:
        body = res.json()
    except ValueError:
        return {"error": fallback}
    if isinstance(body, dict) and body.get("error"):
        return {"error": body["error"]}
    return {"error": fallback}


# -------------------------------
# Health
# -------------------------------

def check_health() -> bool:
    """
    Returns True when the server answers /health with ok.
    """
    try:
        res = requests.get(_url("/health"), timeout=config.REQUEST_TIMEOUT)
        return res.status_code == 200 and bool(res.json().get("ok"))
    except (requests.RequestException, ValueError) as e:
        logger.warning("server_offline", error=str(e))
        return False


# -------------------------------
# Authentication
# -------------------------------

def register_user(username, password):
    """
    Creates an account. Returns {"id", "username"} or {"error"}.
    """
    try:
        res = requests.post(
            _url("/register"),
            json={"username": username, "password": password},
            timeout=config.REQUEST_TIMEOUT,
        )
    except requests.RequestException as e:
        logger.warning("register_request_failed", error=str(e))
        return {"error": CONNECTION_ERROR}

    if res.status_code == 201:
        return res.json()
    if res.status_code == 400:
        return _error_from(res, "Invalid data.")
    return _error_from(res, "Could not register.")


def login_user(username, password):
    """
    Checks credentials. Returns {"id", "username"} or {"error"}.
    """
    try:
        res = requests.post(
            _url("/login"),
            json={"username": username, "password": password},
            timeout=config.REQUEST_TIMEOUT,
        )
    except requests.RequestException as e:
        logger.warning("login_request_failed", error=str(e))
        return {"error": CONNECTION_ERROR}

    if res.status_code == 200:
        return res.json()
    return _error_from(res, "Invalid credentials.")


# -------------------------------
# Feed
# -------------------------------

def create_post(user_id, content):
    try:
        res = requests.post(
            _url("/posts"),
            json={"user_id": user_id, "content": content},
            timeout=config.REQUEST_TIMEOUT,
        )
    except requests.RequestException as e:
        logger.warning("post_request_failed", error=str(e))
        return {"error": CONNECTION_ERROR}

    if res.status_code == 201:
        return res.json()
    return _error_from(res, "Could not create post.")


def list_feed(user_id):
    """
    Returns the list of posts, or {"error"} when the feed could not be loaded.
    """
    try:
        res = requests.get(
            _url("/posts"),
            params={"user_id": user_id},
            timeout=config.REQUEST_TIMEOUT,
        )
    except requests.RequestException as e:
        logger.warning("feed_request_failed", error=str(e))
        return {"error": CONNECTION_ERROR}

    if res.status_code != 200:
        return _error_from(res, "Could not load posts.")
    try:
        data = res.json()
    except ValueError:
        return {"error": "Could not load posts."}
    return data if isinstance(data, list) else {"error": "Could not load posts."}


def toggle_hype(user_id, post_id):
    try:
        res = requests.post(
            _url("/hypes"),
            json={"user_id": user_id, "post_id": post_id},
            timeout=config.REQUEST_TIMEOUT,
        )
    except requests.RequestException as e:
        logger.warning("hype_request_failed", error=str(e))
        return {"error": CONNECTION_ERROR}

    if res.status_code == 200:
        return res.json()
    return _error_from(res, "Could not hype post.")
