"""Salted PBKDF2 credential hashing and verification."""
from .errors import CredentialError, InvalidArgument, RandomSourceUnavailable
from .kdf import HasherConfig
from .record import CredentialRecord
from .hasher import CredentialHasher

__all__ = [
    "CredentialError",
    "InvalidArgument",
    "RandomSourceUnavailable",
    "HasherConfig",
    "CredentialRecord",
    "CredentialHasher",
]
