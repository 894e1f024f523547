from __future__ import annotations
import base64
import binascii
from dataclasses import dataclass

from .errors import InvalidArgument
from .kdf import ALGORITHMS, _check_positive_int, encode_key


MAGIC = b"PWHR"      # record signature
VERSION = 1          # record format version

# Stable on-disk ids; never renumber.
ALGORITHM_IDS = {"sha1": 1, "sha256": 2, "sha512": 3}
_ALGORITHM_NAMES = {v: k for k, v in ALGORITHM_IDS.items()}

# MAGIC(4) | VERSION(1) | alg_id(1) | iterations(4, big endian) | salt_len(1) | key_len(1)
_FIXED_LEN = 4 + 1 + 1 + 4 + 1 + 1


@dataclass(frozen=True)
class CredentialRecord:
    """Salt and derived key plus the parameters that produced them.

    The caller persists this next to the identity. Storing the iteration
    count and algorithm with every record lets verification keep working
    after the process-wide defaults are raised.
    """

    salt: bytes
    key: bytes
    iterations: int
    algorithm: str = "sha256"
    version: int = VERSION

    def __post_init__(self) -> None:
        for name in ("salt", "key"):
            value = getattr(self, name)
            if not isinstance(value, (bytes, bytearray, memoryview)):
                raise InvalidArgument(f"Record {name} must be bytes, got {type(value).__name__}.")
            # frozen dataclass; drivers often hand back bytearray or memoryview
            object.__setattr__(self, name, bytes(value))
        _check_positive_int("iterations", self.iterations)
        if self.iterations > 0xFFFFFFFF:
            raise InvalidArgument(f"Iteration count out of range: {self.iterations}")
        if self.algorithm not in ALGORITHM_IDS:
            raise InvalidArgument(f"Unsupported PBKDF2 algorithm: {self.algorithm!r}")
        if isinstance(self.version, bool) or not isinstance(self.version, int) or not 0 <= self.version <= 255:
            raise InvalidArgument(f"Record version must fit in one byte, got {self.version!r}.")

    @property
    def key_b64(self) -> str:
        return encode_key(self.key)

    def to_bytes(self) -> bytes:
        if len(self.salt) > 255 or len(self.key) > 255:
            raise InvalidArgument("Salt/key too long for 1-byte length fields.")
        return (
            MAGIC
            + bytes([self.version, ALGORITHM_IDS[self.algorithm]])
            + self.iterations.to_bytes(4, "big")
            + bytes([len(self.salt), len(self.key)])
            + self.salt
            + self.key
        )

    def to_string(self) -> str:
        return base64.b64encode(self.to_bytes()).decode("ascii")

    @classmethod
    def from_bytes(cls, blob: bytes) -> "CredentialRecord":
        if len(blob) < _FIXED_LEN:
            raise InvalidArgument("Record too small to be a credential record.")

        if blob[:4] != MAGIC:
            raise InvalidArgument("Not a credential record (bad magic).")

        version = blob[4]
        if version != VERSION:
            raise InvalidArgument(f"Unsupported credential record version: {version}")

        algorithm = _ALGORITHM_NAMES.get(blob[5])
        if algorithm is None or algorithm not in ALGORITHMS:
            raise InvalidArgument(f"Unknown PBKDF2 algorithm id: {blob[5]}")

        iterations = int.from_bytes(blob[6:10], "big")
        if iterations < 1:
            raise InvalidArgument("Record has a zero iteration count.")

        salt_len = blob[10]
        key_len = blob[11]
        if len(blob) != _FIXED_LEN + salt_len + key_len:
            raise InvalidArgument("Truncated or oversized credential record.")

        salt = blob[_FIXED_LEN : _FIXED_LEN + salt_len]
        key = blob[_FIXED_LEN + salt_len :]
        return cls(salt=salt, key=key, iterations=iterations, algorithm=algorithm, version=version)

    @classmethod
    def from_string(cls, text: str) -> "CredentialRecord":
        if not isinstance(text, str):
            raise InvalidArgument("Credential record must be text.")
        try:
            blob = base64.b64decode(text.strip().encode("ascii"), validate=True)
        except (binascii.Error, UnicodeEncodeError) as e:
            raise InvalidArgument("Credential record is not valid base64.") from e
        return cls.from_bytes(blob)
