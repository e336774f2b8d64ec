from __future__ import annotations

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ApiError, ErrorKind
from app.core.logging import get_logger
from app.core.security import verify_password
from app.models.admin_user import AdminUser
from app.models.user import User

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid credentials."


async def authenticate_admin(
    db: AsyncSession,
    *,
    email: str,
    password: str,
) -> AdminUser:
    admin = (
        await db.execute(select(AdminUser).where(func.lower(AdminUser.email) == email.lower()))
    ).scalar_one_or_none()

    if not admin or not verify_password(password, admin.password_hash):
        logger.warning("LOGIN FAILED | realm=admin | email=%s", email)
        raise ApiError(ErrorKind.UNAUTHORIZED, INVALID_CREDENTIALS)

    logger.info("LOGIN SUCCESS | realm=admin | admin_id=%s", admin.id)
    return admin


async def authenticate_user(
    db: AsyncSession,
    *,
    site_id: UUID,
    username: str,
    password: str,
) -> User:
    user = (
        await db.execute(
            select(User).where(
                User.username == username,
                User.site_id == site_id,
            )
        )
    ).scalar_one_or_none()

    if not user or not verify_password(password, user.password_hash):
        logger.warning("LOGIN FAILED | realm=user | site_id=%s | username=%s", site_id, username)
        raise ApiError(ErrorKind.UNAUTHORIZED, INVALID_CREDENTIALS)

    logger.info("LOGIN SUCCESS | realm=user | user_id=%s | site_id=%s", user.id, site_id)
    return user
