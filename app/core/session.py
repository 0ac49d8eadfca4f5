# app/core/session.py

from dataclasses import dataclass


# -------------------------------
# Screens
# -------------------------------

LOGIN = "login"
REGISTER = "register"
FEED = "feed"

UNAUTHENTICATED_SCREENS = (LOGIN, REGISTER)


@dataclass(frozen=True)
class Identity:
    id: int
    username: str

    @classmethod
    def from_payload(cls, payload):
        """
        Builds an identity from an API or storage payload, None if it is incomplete.
        """
        if not isinstance(payload, dict):
            return None
        user_id = payload.get("id")
        username = payload.get("username")
        if not isinstance(user_id, int) or isinstance(user_id, bool) or not username:
            return None
        return cls(id=user_id, username=str(username))

    def to_payload(self) -> dict:
        return {"id": self.id, "username": self.username}


def required_screen(identity: Identity | None, current_screen: str) -> str:
    """
    Returns the screen that must be shown for the stored identity.
    Without an identity only the login and register screens are allowed;
    with one, those two screens send the user to the feed.
    """
    if identity is None:
        return current_screen if current_screen in UNAUTHENTICATED_SCREENS else LOGIN
    if current_screen in UNAUTHENTICATED_SCREENS:
        return FEED
    return current_screen
