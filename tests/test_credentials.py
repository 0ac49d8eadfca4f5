"""Credential scheme tests."""

import pytest

from server.core.credentials import HashedCredentials, PlaintextCredentials, get_credential_scheme


def test_plaintext_stores_verbatim():
    scheme = PlaintextCredentials()
    assert scheme.prepare("Abc12!") == "Abc12!"
    assert scheme.verify("Abc12!", "Abc12!")
    assert not scheme.verify("abc12!", "Abc12!")


def test_hashed_scheme_salts_each_hash():
    scheme = HashedCredentials()
    first = scheme.prepare("Abc12!")
    second = scheme.prepare("Abc12!")
    assert first != second
    assert scheme.verify("Abc12!", first)
    assert scheme.verify("Abc12!", second)


def test_hashed_scheme_rejects_plaintext_rows():
    assert HashedCredentials().verify("Abc12!", "Abc12!") is False


def test_scheme_lookup():
    assert isinstance(get_credential_scheme("plaintext"), PlaintextCredentials)
    assert isinstance(get_credential_scheme("ARGON2"), HashedCredentials)
    with pytest.raises(ValueError):
        get_credential_scheme("md5")
