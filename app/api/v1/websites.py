from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.schemas.site import CurrentSite, CurrentSiteUpdate, SiteCreate, SitePage, SiteRead
from app.security import tenancy
from app.security.context import RequestContext
from app.security.dependencies import admin_procedure
from app.services import site_service

router = APIRouter(prefix="/websites", tags=["websites"])


@router.get("", response_model=SitePage)
async def list_sites(
    limit: int = Query(10, ge=1, le=100),
    cursor: Optional[UUID] = Query(None),
    ctx: RequestContext = Depends(admin_procedure),
    db: AsyncSession = Depends(get_db),
):
    page = await site_service.list_sites(db, limit=limit, cursor=cursor)
    return SitePage(websites=page.items, next_cursor=page.next_cursor)


@router.post("", response_model=SiteRead, status_code=status.HTTP_201_CREATED)
async def create_site(
    site_in: SiteCreate,
    ctx: RequestContext = Depends(admin_procedure),
    db: AsyncSession = Depends(get_db),
):
    return await site_service.create_site(db, site_in=site_in)


@router.get("/current", response_model=CurrentSite)
async def get_current_site(ctx: RequestContext = Depends(admin_procedure)):
    return CurrentSite(site_id=ctx.site_id)


@router.put("/current", response_model=CurrentSite)
async def update_current_site(
    body: CurrentSiteUpdate,
    ctx: RequestContext = Depends(admin_procedure),
    db: AsyncSession = Depends(get_db),
):
    site_id = await tenancy.set_current_site(
        db,
        admin_session=ctx.require_admin(),
        site_id=body.site_id,
    )
    return CurrentSite(site_id=site_id)


@router.get("/{site_id}", response_model=SiteRead)
async def get_site(
    site_id: UUID,
    ctx: RequestContext = Depends(admin_procedure),
    db: AsyncSession = Depends(get_db),
):
    return await site_service.get_site(db, site_id=site_id)
