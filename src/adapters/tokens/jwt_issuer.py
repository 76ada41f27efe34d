"""
JWT token issuer adapter - Implements TokenIssuer protocol.

Email verification tokens are EdDSA (Ed25519) signed JWTs. Anyone holding the
public key can check authenticity and expiry without touching the database.

Claims:
- sub: user identifier
- purpose: always "email_verification"; a verification token never doubles
  as a session or API token
- iat / exp: issuance and expiry (UTC, seconds)
- jti: unique token identifier

The private key is loaded once and never logged or serialized.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

import jwt
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from src.domain.exceptions import TokenIssuanceError

EMAIL_VERIFICATION_PURPOSE = "email_verification"
ALGORITHM = "EdDSA"


@dataclass(frozen=True)
class VerificationClaims:
    """Decoded content of a verified email verification token."""

    user_id: UUID
    purpose: str
    issued_at: datetime
    expires_at: datetime
    token_id: str


def generate_signing_key() -> str:
    """Generate a fresh Ed25519 private key as unencrypted PKCS#8 PEM."""
    key = Ed25519PrivateKey.generate()
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()


class JwtVerificationTokenIssuer:
    """
    Implements TokenIssuer protocol via PyJWT.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Thread-safe: holds only immutable key material.
    """

    def __init__(self, private_key_pem: str, ttl_seconds: int = 86400) -> None:
        """
        Load the signing key.

        Args:
            private_key_pem: Ed25519 private key, unencrypted PEM
            ttl_seconds: Token lifetime

        Raises:
            ValueError: If the key is not an Ed25519 private key
        """
        try:
            key = serialization.load_pem_private_key(private_key_pem.encode(), password=None)
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise ValueError("Email verification key is not a valid PEM private key") from e
        if not isinstance(key, Ed25519PrivateKey):
            raise ValueError("Email verification key must be an Ed25519 private key")

        self._private_key = key
        self._public_key = key.public_key()
        self._ttl = timedelta(seconds=ttl_seconds)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(ttl={self._ttl})"

    def issue(self, user_id: UUID) -> str:
        """
        Mint an email verification token for user_id.

        Raises:
            TokenIssuanceError: If signing fails
        """
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "purpose": EMAIL_VERIFICATION_PURPOSE,
            "iat": now,
            "exp": now + self._ttl,
            "jti": str(uuid4()),
        }
        try:
            return jwt.encode(payload, self._private_key, algorithm=ALGORITHM)
        except (jwt.PyJWTError, ValueError, TypeError) as e:
            raise TokenIssuanceError("Could not sign email verification token") from e

    def inspect(self, token: str) -> VerificationClaims:
        """
        Verify signature, expiry and purpose, and return the claims.

        Raises:
            jwt.InvalidTokenError: If the token is forged, expired, malformed
                or minted for another purpose
        """
        claims = jwt.decode(
            token,
            self._public_key,
            algorithms=[ALGORITHM],
            options={"require": ["sub", "purpose", "iat", "exp", "jti"]},
        )
        if claims["purpose"] != EMAIL_VERIFICATION_PURPOSE:
            raise jwt.InvalidTokenError("Not an email verification token")

        try:
            user_id = UUID(claims["sub"])
        except ValueError as e:
            raise jwt.InvalidTokenError("Subject is not a user identifier") from e

        return VerificationClaims(
            user_id=user_id,
            purpose=claims["purpose"],
            issued_at=datetime.fromtimestamp(claims["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
            token_id=claims["jti"],
        )
