"""Bearer-token dependency for the cart and order routes.

The token is read from ``Authorization: Bearer ...`` and, failing that, from
the ``token`` cookie set at login. A missing token is a 401; a token that does
not verify is a 403.
"""

from fastapi import Cookie, Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from protean.utils.globals import current_domain

from storefront.identity.credentials import Identity, InvalidCredential, verify_token
from storefront.identity.user import User
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    token: str | None = Cookie(None),
) -> Identity:
    raw_token = credentials.credentials if credentials else token
    if not raw_token:
        raise HTTPException(status_code=401, detail="Access token is missing")

    try:
        return verify_token(raw_token)
    except InvalidCredential as exc:
        logger.info("Rejected bearer token", reason=str(exc))
        raise HTTPException(status_code=403, detail="Invalid or expired token") from exc


def acting_user(identity: Identity, email: str | None = None) -> User:
    """Load the caller's account, refusing requests that name a different user."""
    user = current_domain.repository_for(User).get(identity.user_id)
    if email and email.strip().lower() != user.email:
        raise HTTPException(status_code=403, detail="Token does not belong to this user")
    return user
