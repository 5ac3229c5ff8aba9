"""Bearer token verification for console routes

Tokens are issued by the external identity provider; this service only
checks their signature, expiry and audience.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from host_console.config import settings

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class ConsoleUser:
    """Authenticated host-console user"""
    id: str
    email: Optional[str] = None
    restaurant_id: Optional[str] = None


def decode_token(token: str) -> dict:
    options = {"verify_aud": settings.auth_jwt_audience is not None}
    return jwt.decode(
        token,
        settings.auth_jwt_secret,
        algorithms=[settings.auth_jwt_algorithm],
        audience=settings.auth_jwt_audience,
        options=options,
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> ConsoleUser:
    """Get current authenticated user from token"""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        raise credentials_exception

    user_id = payload.get("sub")
    if not user_id:
        raise credentials_exception

    app_metadata = payload.get("app_metadata") or {}
    return ConsoleUser(
        id=user_id,
        email=payload.get("email"),
        restaurant_id=app_metadata.get("restaurant_id"),
    )


async def verify_restaurant_access(
    restaurant_id: UUID,
    current_user: ConsoleUser = Depends(get_current_user),
) -> ConsoleUser:
    """Users pinned to a restaurant may only read that restaurant"""
    if current_user.restaurant_id and current_user.restaurant_id != str(restaurant_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied to this restaurant",
        )
    return current_user
