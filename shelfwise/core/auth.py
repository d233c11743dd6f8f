"""Caller identification for API requests."""

import typing as t
from datetime import datetime, timedelta, timezone

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from shelfwise.core.config import SETTINGS

HTTP_BEARER: HTTPBearer = HTTPBearer(auto_error=False)


def create_access_token(
    uid: str, expires_delta: timedelta = timedelta(hours=1)
) -> str:
    """Create a JWT identifying a user.

    Args:
        uid (str): The user ID stored in the ``sub`` claim.
        expires_delta (timedelta): Lifetime of the token.

    Returns:
        str: The encoded JWT token.
    """
    to_encode: t.Dict[str, t.Any] = {
        "sub": uid,
        "exp": datetime.now(timezone.utc) + expires_delta,
    }
    return str(
        jwt.encode(to_encode, SETTINGS.secret_key, algorithm=SETTINGS.algorithm)
    )


def decode_uid(token: str) -> str | None:
    """Extract the user ID from a JWT token.

    Args:
        token (str): The JWT token.

    Returns:
        str | None: The user ID if the token is valid, else None.
    """
    try:
        payload: t.Dict[str, t.Any] = jwt.decode(
            token, SETTINGS.secret_key, algorithms=[SETTINGS.algorithm]
        )
    except JWTError:
        return None

    uid: t.Any = payload.get("sub")
    return uid if isinstance(uid, str) and uid else None


async def get_current_uid(
    credentials: t.Annotated[
        HTTPAuthorizationCredentials | None, Depends(HTTP_BEARER)
    ],
) -> str:
    """Get the authenticated caller's user ID.

    Args:
        credentials (HTTPAuthorizationCredentials | None):
            The bearer credentials from the Authorization header.

    Returns:
        str: The caller's user ID.
    """
    uid: str | None = (
        decode_uid(credentials.credentials) if credentials is not None else None
    )
    if uid is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return uid
