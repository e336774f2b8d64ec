from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ApiError, ErrorKind
from app.core.logging import get_logger
from app.models.eco_project import EcoProject
from app.schemas.project import EcoProjectCreate
from app.services.location_service import get_location
from app.services.pagination import Page, paginate

logger = get_logger(__name__)


async def list_projects(
    db: AsyncSession,
    *,
    site_id: UUID,
    limit: int = 10,
    cursor: Optional[int] = None,
) -> Page[EcoProject]:
    stmt = select(EcoProject).where(
        EcoProject.site_id == site_id,
        EcoProject.is_delete.is_(False),
    )
    return await paginate(db, stmt, key=EcoProject.id, limit=limit, cursor=cursor)


async def get_project(
    db: AsyncSession,
    *,
    site_id: UUID,
    project_id: int,
) -> EcoProject:
    project = (
        await db.execute(
            select(EcoProject).where(
                EcoProject.id == project_id,
                EcoProject.site_id == site_id,
                EcoProject.is_delete.is_(False),
            )
        )
    ).scalar_one_or_none()

    if not project:
        raise ApiError(ErrorKind.NOT_FOUND, "Project not found.")
    return project


async def create_project(
    db: AsyncSession,
    *,
    site_id: UUID,
    project_in: EcoProjectCreate,
) -> EcoProject:
    # Location must live on the same site
    location = await get_location(db, site_id=site_id, location_id=project_in.location_id)

    project = EcoProject(
        title=project_in.title,
        short_title=project_in.short_title,
        intro=project_in.intro,
        location_id=location.id,
        site_id=site_id,
    )

    db.add(project)
    await db.commit()
    await db.refresh(project)

    logger.info("Created project | id=%s | site_id=%s", project.id, site_id)
    return project
