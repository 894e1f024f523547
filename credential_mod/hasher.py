from __future__ import annotations
import asyncio
import logging
from dataclasses import replace
from typing import Optional

from cryptography.hazmat.primitives import constant_time

from .errors import InvalidArgument
from .kdf import HasherConfig, decode_key, derive_key, encode_key, new_salt
from .record import VERSION, CredentialRecord
from .validation import Predicate


logger = logging.getLogger(__name__)


class CredentialHasher:
    """Salted PBKDF2 hashing and verification of plaintext credentials.

    Holds nothing but an immutable ``HasherConfig``, so one instance can be
    shared across threads, and several instances with different configs can
    coexist (e.g. while migrating to a higher iteration count).

    Plaintext, salts and keys are never logged.
    """

    def __init__(self, config: HasherConfig = HasherConfig(), policy: Optional[Predicate] = None):
        self.config = config
        self.policy = policy

    def generate_salt(self) -> bytes:
        return new_salt(self.config)

    def derive_key(self, plaintext: str, salt: bytes, iterations: Optional[int] = None) -> str:
        """Derive the base64-encoded key for ``plaintext`` under ``salt``.

        Deterministic for fixed (plaintext, salt, iterations). ``iterations``
        defaults to the configured count.
        """
        if iterations is None:
            iterations = self.config.iterations
        return encode_key(derive_key(plaintext, salt, iterations, self.config))

    def verify_credential(
        self,
        candidate: str,
        stored_key: str,
        stored_salt: bytes,
        iterations: Optional[int] = None,
    ) -> bool:
        """Check ``candidate`` against a stored base64 key and salt.

        A mismatch returns False. Malformed inputs (wrong salt length,
        non-positive iterations, missing candidate, undecodable key) raise
        ``InvalidArgument``.
        """
        if iterations is None:
            iterations = self.config.iterations
        expected = decode_key(stored_key)
        actual = derive_key(candidate, stored_salt, iterations, self.config)
        return self._compare(actual, expected)

    def hash_credential(self, plaintext: str) -> CredentialRecord:
        """Create a new record for ``plaintext`` with a fresh salt.

        Empty plaintext is rejected here, as is anything the optional policy
        predicate refuses.
        """
        if plaintext is None or not isinstance(plaintext, str):
            raise InvalidArgument("Password must be a string.")
        if plaintext == "":
            raise InvalidArgument("Password must be a non-empty string.")
        if self.policy is not None and not self.policy(plaintext):
            raise InvalidArgument("Password does not satisfy the password policy.")

        salt = self.generate_salt()
        key = derive_key(plaintext, salt, self.config.iterations, self.config)
        logger.debug(
            "Hashed credential (pbkdf2-%s, %d iterations)", self.config.algorithm, self.config.iterations
        )
        return CredentialRecord(
            salt=salt,
            key=key,
            iterations=self.config.iterations,
            algorithm=self.config.algorithm,
        )

    def verify_record(self, candidate: str, record: CredentialRecord) -> bool:
        """Verify against a record using the parameters stored in it."""
        params = replace(
            self.config,
            iterations=record.iterations,
            salt_len=len(record.salt),
            key_len=len(record.key),
            algorithm=record.algorithm,
        )
        actual = derive_key(candidate, record.salt, record.iterations, params)
        return self._compare(actual, record.key)

    def needs_rehash(self, record: CredentialRecord) -> bool:
        """True when ``record`` was made with parameters other than the current config."""
        return (
            record.version != VERSION
            or record.algorithm != self.config.algorithm
            or record.iterations < self.config.iterations
            or len(record.salt) != self.config.salt_len
            or len(record.key) != self.config.key_len
        )

    async def ahash_credential(self, plaintext: str) -> CredentialRecord:
        return await asyncio.to_thread(self.hash_credential, plaintext)

    async def averify_record(self, candidate: str, record: CredentialRecord) -> bool:
        return await asyncio.to_thread(self.verify_record, candidate, record)

    @staticmethod
    def _compare(actual: bytes, expected: bytes) -> bool:
        ok = constant_time.bytes_eq(actual, expected)
        if not ok:
            logger.debug("Credential verification failed")
        return ok
