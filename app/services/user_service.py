from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy import and_, case, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ApiError, ErrorKind
from app.core.logging import get_logger
from app.core.security import hash_password
from app.models.role import Role, RoleDomain, RoleScope
from app.models.site import Site
from app.models.user import User
from app.schemas.user import UserCreate, UserUpdate
from app.services.pagination import Page, paginate
from app.services.role_filter import RoleFilter, role_predicate

logger = get_logger(__name__)

USERNAME_TAKEN = "Username is not available."


async def check_username(
    db: AsyncSession,
    *,
    site_id: UUID,
    username: str,
) -> None:
    """Raises CONFLICT when ``username`` is already used on ``site_id``."""
    existing = (
        await db.execute(
            select(User.id).where(
                User.username == username,
                User.site_id == site_id,
            )
        )
    ).scalar_one_or_none()

    if existing is not None:
        raise ApiError(ErrorKind.CONFLICT, USERNAME_TAKEN)


async def list_users(
    db: AsyncSession,
    *,
    site_id: UUID,
    limit: int = 10,
    role_filter: Optional[RoleFilter] = None,
    cursor: Optional[int] = None,
) -> Page[User]:
    stmt = select(User).where(User.site_id == site_id)
    if role_filter is not None:
        stmt = stmt.join(User.role).where(role_predicate(role_filter))

    return await paginate(db, stmt, key=User.id, limit=limit, cursor=cursor)


async def resolve_user_role(db: AsyncSession, *, site_id: UUID) -> Optional[Role]:
    """
    A SITE-scoped USER role bound to ``site_id`` wins over the DEFAULT one.
    """
    site_scoped = and_(
        Role.scope == RoleScope.SITE,
        Role.sites.any(Site.id == site_id),
    )
    default = Role.scope == RoleScope.DEFAULT

    return (
        await db.execute(
            select(Role)
            .where(
                Role.domain == RoleDomain.USER,
                or_(site_scoped, default),
            )
            .order_by(case((Role.scope == RoleScope.SITE, 0), else_=1))
            .limit(1)
        )
    ).scalar_one_or_none()


async def create_user(
    db: AsyncSession,
    *,
    site_id: UUID,
    user_in: UserCreate,
) -> User:
    role = await resolve_user_role(db, site_id=site_id)
    if role is None:
        logger.error("No USER role resolvable | site_id=%s", site_id)
        raise ApiError(ErrorKind.INTERNAL, "Role not found. Creation process cannot proceed.")

    data = user_in.model_dump(exclude={"confirm_password", "password"})
    user = User(
        **data,
        password_hash=hash_password(user_in.password),
        site_id=site_id,
        role_id=role.id,
    )

    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.info("Username conflict | site_id=%s | username=%s", site_id, user_in.username)
        raise ApiError(ErrorKind.CONFLICT, USERNAME_TAKEN)

    await db.refresh(user)
    logger.info("Created user | id=%s | site_id=%s | role=%s", user.id, site_id, role.role)
    return user


async def get_user(db: AsyncSession, *, user_id: int) -> Optional[User]:
    # Not tenant-scoped: admins may look up any user by id
    return (
        await db.execute(select(User).where(User.id == user_id).limit(1))
    ).scalar_one_or_none()


async def get_signed_in_user(
    db: AsyncSession,
    *,
    site_id: UUID,
    user_id: int,
) -> User:
    user = (
        await db.execute(
            select(User).where(
                User.id == user_id,
                User.site_id == site_id,
            )
        )
    ).scalar_one_or_none()

    if not user:
        raise ApiError(ErrorKind.NOT_FOUND, "User not found.")
    return user


async def update_user(
    db: AsyncSession,
    *,
    user_id: int,
    user_in: UserUpdate,
) -> User:
    user = await get_user(db, user_id=user_id)
    if user is None:
        raise ApiError(ErrorKind.NOT_FOUND, "User not found.")

    changes = user_in.changes()
    password = changes.pop("password", None)
    if password:
        user.password_hash = hash_password(password)
    for field_name, value in changes.items():
        setattr(user, field_name, value)

    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ApiError(ErrorKind.CONFLICT, USERNAME_TAKEN)

    await db.refresh(user)
    return user
