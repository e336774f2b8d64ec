"""
Tenant context provider.

The "current site" of a request is resolved once, in this order:

1. explicit selection (``X-Site-ID`` header)
2. the admin's persisted last-used site
3. the site carried by the user session
4. the site whose domain matches the request host

The admin's selection is explicit state keyed by the admin's subject id and
only changes through ``set_current_site``.
"""
from typing import Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ApiError, ErrorKind
from app.core.logging import get_logger
from app.models.admin_user import AdminUser
from app.models.site import Site
from app.security.context import Session

logger = get_logger(__name__)


def _parse_site_id(raw: str) -> UUID:
    try:
        return UUID(raw)
    except ValueError:
        raise ApiError(ErrorKind.NOT_FOUND, "Site not found.")


async def _site_exists(db: AsyncSession, site_id: UUID) -> bool:
    result = await db.execute(select(Site.id).where(Site.id == site_id))
    return result.scalar_one_or_none() is not None


async def current_site_id(
    db: AsyncSession,
    *,
    requested: Optional[str] = None,
    host: Optional[str] = None,
    admin_session: Optional[Session] = None,
    user_session: Optional[Session] = None,
) -> Optional[UUID]:
    if requested:
        site_id = _parse_site_id(requested)
        if not await _site_exists(db, site_id):
            raise ApiError(ErrorKind.NOT_FOUND, "Site not found.")
        return site_id

    if admin_session is not None:
        last_site_id = (
            await db.execute(
                select(AdminUser.last_site_id).where(AdminUser.id == admin_session.subject)
            )
        ).scalar_one_or_none()
        if last_site_id is not None:
            return last_site_id

    if user_session is not None and user_session.site_id is not None:
        return user_session.site_id

    if host:
        domain = host.split(":", 1)[0].lower()
        return (
            await db.execute(select(Site.id).where(Site.domain == domain))
        ).scalar_one_or_none()

    return None


async def set_current_site(
    db: AsyncSession,
    *,
    admin_session: Session,
    site_id: UUID,
) -> UUID:
    if not await _site_exists(db, site_id):
        raise ApiError(ErrorKind.NOT_FOUND, "Site not found.")

    await db.execute(
        update(AdminUser)
        .where(AdminUser.id == admin_session.subject)
        .values(last_site_id=site_id)
    )
    await db.commit()

    logger.info("Current site updated | admin_id=%s | site_id=%s", admin_session.subject, site_id)
    return site_id
