from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ApiError, ErrorKind
from app.core.logging import get_logger
from app.models.eco_location import EcoLocation
from app.schemas.location import EcoLocationCreate, EcoLocationUpdate
from app.services.pagination import Page, paginate

logger = get_logger(__name__)


async def get_location(
    db: AsyncSession,
    *,
    site_id: UUID,
    location_id: int,
) -> EcoLocation:
    location = (
        await db.execute(
            select(EcoLocation).where(
                EcoLocation.id == location_id,
                EcoLocation.site_id == site_id,
                EcoLocation.is_delete.is_(False),
            )
        )
    ).scalar_one_or_none()

    if not location:
        raise ApiError(ErrorKind.NOT_FOUND, "Location not found.")
    return location


async def list_locations(
    db: AsyncSession,
    *,
    site_id: UUID,
    limit: int = 10,
    cursor: Optional[int] = None,
) -> Page[EcoLocation]:
    stmt = select(EcoLocation).where(
        EcoLocation.site_id == site_id,
        EcoLocation.is_delete.is_(False),
    )
    return await paginate(db, stmt, key=EcoLocation.id, limit=limit, cursor=cursor)


async def create_location(
    db: AsyncSession,
    *,
    site_id: UUID,
    location_in: EcoLocationCreate,
) -> EcoLocation:
    location = EcoLocation(
        location=location_in.location,
        cn=location_in.cn,
        st=location_in.st,
        site_id=site_id,
    )

    db.add(location)
    await db.commit()
    await db.refresh(location)

    logger.info("Created location | id=%s | site_id=%s", location.id, site_id)
    return location


async def update_location(
    db: AsyncSession,
    *,
    site_id: UUID,
    location_id: int,
    location_in: EcoLocationUpdate,
) -> EcoLocation:
    location = await get_location(db, site_id=site_id, location_id=location_id)

    for field_name, value in location_in.model_dump(exclude_none=True).items():
        setattr(location, field_name, value)

    await db.commit()
    await db.refresh(location)
    return location


async def delete_location(
    db: AsyncSession,
    *,
    site_id: UUID,
    location_id: int,
) -> None:
    """Soft delete; the row stays for projects that reference it."""
    location = await get_location(db, site_id=site_id, location_id=location_id)
    location.is_delete = True
    await db.commit()

    logger.info("Deleted location | id=%s | site_id=%s", location_id, site_id)
