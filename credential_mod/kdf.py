from __future__ import annotations
import base64
import binascii
import logging
import os
from dataclasses import dataclass, fields

from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from cryptography.hazmat.primitives import hashes

from .errors import InvalidArgument, RandomSourceUnavailable


logger = logging.getLogger(__name__)

# PRF name -> hash class. sha1 is kept only to read records from older deployments.
ALGORITHMS = {
    "sha1": hashes.SHA1,
    "sha256": hashes.SHA256,
    "sha512": hashes.SHA512,
}


def _check_positive_int(name: str, value) -> None:
    # bool is an int subclass; True must not pass as one iteration
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidArgument(f"{name} must be a positive integer, got {value!r}.")


@dataclass(frozen=True)
class HasherConfig:
    # The iteration count is the brute-force cost floor; never lower it to speed things up.
    iterations: int = 10_000
    salt_len: int = 32
    key_len: int = 32
    algorithm: str = "sha256"

    def __post_init__(self) -> None:
        _check_positive_int("iterations", self.iterations)
        _check_positive_int("salt_len", self.salt_len)
        _check_positive_int("key_len", self.key_len)
        if self.algorithm not in ALGORITHMS:
            raise InvalidArgument(f"Unsupported PBKDF2 algorithm: {self.algorithm!r}")

    @classmethod
    def from_env(cls, prefix: str = "CREDHASH_", environ=None) -> "HasherConfig":
        """Build a config from process environment overrides.

        Recognised variables (with the default prefix): CREDHASH_ITERATIONS,
        CREDHASH_SALT_LEN, CREDHASH_KEY_LEN and CREDHASH_ALGORITHM. Unset
        variables keep the dataclass defaults.
        """
        env = os.environ if environ is None else environ
        overrides = {}
        for f in fields(cls):
            raw = env.get(prefix + f.name.upper())
            if raw is None or raw.strip() == "":
                continue
            if f.name == "algorithm":
                overrides[f.name] = raw.strip().lower()
                continue
            try:
                overrides[f.name] = int(raw)
            except ValueError as e:
                raise InvalidArgument(f"{prefix}{f.name.upper()} must be an integer, got {raw!r}") from e
        config = cls(**overrides)
        if overrides:
            logger.debug("Hasher config from environment: %s", config)
        return config


def new_salt(params: HasherConfig = HasherConfig()) -> bytes:
    try:
        return os.urandom(params.salt_len)
    except (NotImplementedError, OSError) as e:
        logger.debug("os.urandom(%d) failed: %s", params.salt_len, e)
        raise RandomSourceUnavailable("Could not read from the OS secure random source.") from e


def derive_key(password: str, salt: bytes, iterations: int, params: HasherConfig = HasherConfig()) -> bytes:
    if password is None:
        raise InvalidArgument("Password is required.")
    if not isinstance(password, str):
        raise InvalidArgument("Password must be a string.")
    if not isinstance(salt, (bytes, bytearray)):
        raise InvalidArgument("Salt must be bytes.")
    if len(salt) != params.salt_len:
        raise InvalidArgument(f"Salt must be exactly {params.salt_len} bytes, got {len(salt)}.")
    _check_positive_int("iterations", iterations)

    kdf = PBKDF2HMAC(
        algorithm=ALGORITHMS[params.algorithm](),
        length=params.key_len,
        salt=bytes(salt),
        iterations=iterations,
    )
    return kdf.derive(password.encode("utf-8"))


def encode_key(key: bytes) -> str:
    return base64.b64encode(key).decode("ascii")


def decode_key(text: str) -> bytes:
    if not isinstance(text, str):
        raise InvalidArgument("Stored key must be base64 text.")
    try:
        return base64.b64decode(text.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as e:
        raise InvalidArgument("Stored key is not valid base64.") from e
