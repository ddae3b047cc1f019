"""
Dépendances d'authentification et d'autorisation / Authentication and authorization dependencies.
Injectées dans les routes via Depends().
"""

import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from throttle_vault.database import get_db
from throttle_vault.models.garage_car import GarageCar
from throttle_vault.models.user import User
from throttle_vault.utils.auth import decode_token

logger = logging.getLogger("throttle_vault.api.deps")

# auto_error=False : on renvoie 401 nous-memes / we answer 401 ourselves
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Extraire et valider l'utilisateur depuis le JWT / Extract and validate user from JWT."""
    if credentials is None:
        raise _unauthorized("Not authenticated")

    payload = decode_token(credentials.credentials)
    if payload is None or payload.get("type") != "access":
        raise _unauthorized("Invalid or expired token")

    user_id = int(payload["sub"])
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if user is None or not user.is_active:
        raise _unauthorized("User not found or inactive")

    return user


async def get_owned_car(
    car_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> GarageCar:
    """Voiture du garage appartenant a l'appelant / Garage car owned by the caller.

    404 si absente, 403 si elle appartient a un autre utilisateur.
    404 when absent, 403 when it belongs to another user.
    """
    car = await db.get(GarageCar, car_id)
    if car is None:
        raise HTTPException(status_code=404, detail=f'Garage car "{car_id}" not found')
    if car.username != user.username:
        logger.warning("User %s denied access to garage car %s", user.username, car_id)
        raise HTTPException(status_code=403, detail="Forbidden")
    return car
