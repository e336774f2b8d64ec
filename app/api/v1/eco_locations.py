from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.schemas.location import (
    EcoLocationCreate,
    EcoLocationPage,
    EcoLocationRead,
    EcoLocationUpdate,
)
from app.security.context import RequestContext
from app.security.dependencies import admin_procedure
from app.services import location_service

router = APIRouter(prefix="/eco-locations", tags=["eco-locations"])


@router.get("", response_model=EcoLocationPage)
async def list_locations(
    limit: int = Query(10, ge=1, le=100),
    cursor: Optional[int] = Query(None),
    ctx: RequestContext = Depends(admin_procedure),
    db: AsyncSession = Depends(get_db),
):
    page = await location_service.list_locations(
        db,
        site_id=ctx.require_site(),
        limit=limit,
        cursor=cursor,
    )
    return EcoLocationPage(locations=page.items, next_cursor=page.next_cursor)


@router.post("", response_model=EcoLocationRead, status_code=status.HTTP_201_CREATED)
async def create_location(
    location_in: EcoLocationCreate,
    ctx: RequestContext = Depends(admin_procedure),
    db: AsyncSession = Depends(get_db),
):
    return await location_service.create_location(
        db,
        site_id=ctx.require_site(),
        location_in=location_in,
    )


@router.get("/{location_id}", response_model=EcoLocationRead)
async def get_location(
    location_id: int,
    ctx: RequestContext = Depends(admin_procedure),
    db: AsyncSession = Depends(get_db),
):
    return await location_service.get_location(
        db,
        site_id=ctx.require_site(),
        location_id=location_id,
    )


@router.patch("/{location_id}", response_model=EcoLocationRead)
async def update_location(
    location_id: int,
    location_in: EcoLocationUpdate,
    ctx: RequestContext = Depends(admin_procedure),
    db: AsyncSession = Depends(get_db),
):
    return await location_service.update_location(
        db,
        site_id=ctx.require_site(),
        location_id=location_id,
        location_in=location_in,
    )


@router.delete("/{location_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_location(
    location_id: int,
    ctx: RequestContext = Depends(admin_procedure),
    db: AsyncSession = Depends(get_db),
):
    await location_service.delete_location(
        db,
        site_id=ctx.require_site(),
        location_id=location_id,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
