from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ApiError, ErrorKind
from app.core.logging import get_logger
from app.models.site import Site
from app.schemas.site import SiteCreate
from app.services.pagination import Page, paginate

logger = get_logger(__name__)


async def list_sites(
    db: AsyncSession,
    *,
    limit: int = 10,
    cursor: Optional[UUID] = None,
) -> Page[Site]:
    return await paginate(db, select(Site), key=Site.id, limit=limit, cursor=cursor)


async def get_site(db: AsyncSession, *, site_id: UUID) -> Site:
    site = (
        await db.execute(select(Site).where(Site.id == site_id))
    ).scalar_one_or_none()

    if not site:
        raise ApiError(ErrorKind.NOT_FOUND, "Site not found.")
    return site


async def create_site(db: AsyncSession, *, site_in: SiteCreate) -> Site:
    site = Site(name=site_in.name, domain=site_in.domain)

    db.add(site)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ApiError(ErrorKind.CONFLICT, "Domain is already used by another site.")

    await db.refresh(site)
    logger.info("Created site | id=%s | domain=%s", site.id, site.domain)
    return site
