# server/core/credentials.py

from passlib.context import CryptContext
from server.core import config


# -------------------------------
# Credential Schemes
# -------------------------------

class PlaintextCredentials:
    """
    Stores passwords exactly as submitted and compares them verbatim.
    Kept as the default so existing user rows keep working.
    """
    name = "plaintext"

    def prepare(self, password: str) -> str:
        return password

    def verify(self, password: str, stored: str) -> bool:
        return password == stored


class HashedCredentials:
    """
    Argon2id hashes through passlib.
    """
    name = "argon2"

    def __init__(self):
        self._context = CryptContext(schemes=["argon2"], deprecated="auto")

    def prepare(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, stored: str) -> bool:
        try:
            return self._context.verify(password, stored)
        except ValueError:
            # stored value is not an argon2 hash, e.g. a row written under plaintext
            return False


_SCHEMES = {
    PlaintextCredentials.name: PlaintextCredentials,
    HashedCredentials.name: HashedCredentials,
}


def get_credential_scheme(name: str | None = None):
    scheme_name = (name or config.CREDENTIAL_SCHEME).lower()
    try:
        return _SCHEMES[scheme_name]()
    except KeyError:
        raise ValueError(f"Unknown credential scheme: {scheme_name}") from None


def credential_scheme():
    """
    FastAPI dependency returning the configured scheme.
    """
    return get_credential_scheme()
