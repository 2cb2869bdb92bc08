"""Credentials: bcrypt password hashing and HS256 access tokens.

Invariants:
    - Plain passwords never leave this module except as bcrypt hashes
    - Tokens carry user_id, email, exp; decode rejects anything without user_id or exp
    - Every decode failure surfaces as UnauthorizedError (never a PyJWT exception)

Design Decisions:
    - Clock passed in to issue_access_token: keeps expiry testable without freezing time
"""

from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from bookpost.core.errors import UnauthorizedError


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a plain password with a fresh bcrypt salt."""
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plain password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(
            password.encode("utf-8"), password_hash.encode("utf-8"),
        )
    except ValueError:
        # stored value is not a bcrypt hash
        return False


def issue_access_token(
    user_id: int,
    email: str,
    secret: str,
    algorithm: str = "HS256",
    expire_hours: int = 72,
    now: datetime | None = None,
) -> str:
    """Sign a token for the given user."""
    issued_at = now or datetime.now(timezone.utc)
    claims = {
        "user_id": user_id,
        "email": email,
        "exp": issued_at + timedelta(hours=expire_hours),
    }
    return jwt.encode(claims, secret, algorithm=algorithm)


def decode_access_token(
    token: str, secret: str, algorithm: str = "HS256",
) -> dict:
    """Verify signature and expiry, return the claims."""
    try:
        claims = jwt.decode(
            token, secret, algorithms=[algorithm],
            options={"require": ["exp", "user_id"]},
        )
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token has expired")
    except jwt.InvalidTokenError:
        raise UnauthorizedError("Invalid or malformed token")

    if not isinstance(claims["user_id"], int) or isinstance(claims["user_id"], bool):
        raise UnauthorizedError("Invalid or malformed token")
    return claims
