from __future__ import annotations


class CredentialError(Exception):
    """Base class for credential hashing failures."""


class InvalidArgument(CredentialError, ValueError):
    """Malformed input: bad salt length, iteration count, plaintext or record."""


class RandomSourceUnavailable(CredentialError, RuntimeError):
    """The OS secure random source could not supply entropy."""
