"""
Credential hasher - Argon2id password digests.

Digests use the PHC string format ($argon2id$v=19$m=...,t=...,p=...$salt$hash),
which embeds algorithm, cost parameters and the random salt, so verifying a
password later needs nothing but the stored string.
"""

import logging

from argon2 import PasswordHasher
from argon2.exceptions import Argon2Error, InvalidHashError, VerifyMismatchError

from .exceptions import HashingError

logger = logging.getLogger(__name__)


class Argon2CredentialHasher:
    """
    Implements CredentialHasher protocol via argon2-cffi.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Salts come from os.urandom inside argon2-cffi.
    """

    def __init__(
        self,
        time_cost: int = 3,
        memory_cost: int = 65536,  # KiB, 64 MB
        parallelism: int = 4,
        hash_len: int = 32,
        salt_len: int = 16,
    ) -> None:
        self._hasher = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            hash_len=hash_len,
            salt_len=salt_len,
        )

    def hash(self, plaintext: str) -> str:
        """
        Hash a password using Argon2id.

        Raises:
            HashingError: If argon2 fails. There is no weaker fallback.
        """
        try:
            return self._hasher.hash(plaintext)
        except Argon2Error as e:
            raise HashingError("Could not hash password") from e

    def verify(self, digest: str, plaintext: str) -> bool:
        """Return True if plaintext matches digest, False otherwise."""
        try:
            return self._hasher.verify(digest, plaintext)
        except VerifyMismatchError:
            return False
        except InvalidHashError:
            logger.warning("Stored password digest is not a valid argon2 hash")
            return False
