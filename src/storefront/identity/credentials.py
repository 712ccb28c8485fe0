"""Password hashing and bearer token handling.

Passwords are stored as salted bcrypt hashes and checked in constant time.
Tokens are HS256 JWTs whose ``user`` claim carries the account id (and, for
tokens issued at login, the email and name).
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import bcrypt
import jwt

from storefront.config import settings


class InvalidCredential(Exception):
    """A token was presented but could not be trusted."""


@dataclass(frozen=True)
class Identity:
    """The authenticated caller behind a request."""

    user_id: str
    email: str | None = None
    name: str | None = None


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=settings.bcrypt_rounds)).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def issue_token(
    user_id: str,
    email: str | None = None,
    name: str | None = None,
    secret: str | None = None,
    ttl_seconds: int | None = None,
) -> str:
    now = datetime.now(UTC)
    user_claim = {"id": str(user_id)}
    if email is not None:
        user_claim["email"] = email
    if name is not None:
        user_claim["name"] = name

    payload = {
        "user": user_claim,
        "iat": now,
        "exp": now + timedelta(seconds=ttl_seconds if ttl_seconds is not None else settings.jwt_ttl_seconds),
    }
    return jwt.encode(payload, secret or settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, secret: str | None = None) -> Identity:
    """Decode ``token`` and return the caller's identity.

    Raises InvalidCredential for a bad signature, an expired token or a payload
    without a user id.
    """
    try:
        payload = jwt.decode(token, secret or settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.InvalidTokenError as exc:
        raise InvalidCredential(str(exc)) from exc

    user = payload.get("user")
    if not isinstance(user, dict) or not user.get("id"):
        raise InvalidCredential("Token does not identify a user")

    return Identity(user_id=str(user["id"]), email=user.get("email"), name=user.get("name"))
