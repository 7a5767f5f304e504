"""
Snipnet Backend — Request Authentication
==========================================

What:  Turns an `Authorization: Bearer <jwt>` header into a Session.
Why:   Protected handlers receive the caller's identity as an explicit
       parameter instead of looking it up in request state.
How:   FastAPI's HTTPBearer extracts the token; python-jose verifies the
       signature and expiry; the `sub` claim is the user id.

Two different 401s exist in this API:
    - "Unauthenticated" (here): no token, or a token we cannot verify
    - "not authorized" (controller): valid session, but not the owner
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import BaseModel

from snipnet.config import settings
from snipnet.exceptions import UnauthenticatedError
from snipnet.schemas.snippet import USER_ID_MAX_LENGTH

logger = logging.getLogger(__name__)

# auto_error=False: a missing header is reported through our own envelope
bearer_scheme = HTTPBearer(auto_error=False)


class Session(BaseModel):
    """Authenticated identity attached to a request."""
    user_id: str


def create_access_token(user_id: str, expires_delta: Optional[timedelta] = None) -> str:
    """Mint a signed token whose `sub` claim is `user_id`."""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.jwt_expire_minutes)
    )
    claims = {"sub": user_id, "exp": expire}
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_session(token: str) -> Session:
    """
    Verify a bearer token and build the Session it describes.

    Raises:
        UnauthenticatedError: Bad signature, expired, or no usable `sub` claim.
    """
    try:
        claims = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.info("Rejected bearer token: %s", str(e))
        raise UnauthenticatedError(detail="Invalid or expired token")

    sub = claims.get("sub")
    if not isinstance(sub, str) or not sub:
        raise UnauthenticatedError(detail="Token missing 'sub'")
    if len(sub) > USER_ID_MAX_LENGTH:
        raise UnauthenticatedError(detail="Token 'sub' is too long")
    return Session(user_id=sub)


async def get_session(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Session:
    """
    FastAPI dependency for protected routes.

    The user id is also kept on request.state for the access log.
    """
    if credentials is None:
        raise UnauthenticatedError(detail="Missing bearer token")
    session = decode_session(credentials.credentials)
    request.state.user_id = session.user_id
    return session
