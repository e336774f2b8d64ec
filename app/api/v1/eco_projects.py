from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.schemas.project import EcoProjectCreate, EcoProjectPage, EcoProjectRead
from app.security.context import RequestContext
from app.security.dependencies import admin_procedure, public_procedure
from app.services import project_service

router = APIRouter(prefix="/eco-projects", tags=["eco-projects"])


@router.get("", response_model=EcoProjectPage)
async def list_projects(
    limit: int = Query(10, ge=1, le=100),
    cursor: Optional[int] = Query(None),
    ctx: RequestContext = Depends(public_procedure),
    db: AsyncSession = Depends(get_db),
):
    page = await project_service.list_projects(
        db,
        site_id=ctx.require_site(),
        limit=limit,
        cursor=cursor,
    )
    return EcoProjectPage(projects=page.items, next_cursor=page.next_cursor)


@router.get("/{project_id}", response_model=EcoProjectRead)
async def get_project(
    project_id: int,
    ctx: RequestContext = Depends(public_procedure),
    db: AsyncSession = Depends(get_db),
):
    return await project_service.get_project(
        db,
        site_id=ctx.require_site(),
        project_id=project_id,
    )


@router.post("", response_model=EcoProjectRead, status_code=status.HTTP_201_CREATED)
async def create_project(
    project_in: EcoProjectCreate,
    ctx: RequestContext = Depends(admin_procedure),
    db: AsyncSession = Depends(get_db),
):
    return await project_service.create_project(
        db,
        site_id=ctx.require_site(),
        project_in=project_in,
    )
