from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.schemas.user import UserCreate, UserPage, UserRead, UserUpdate, UsernameAvailability
from app.security.context import RequestContext
from app.security.dependencies import admin_procedure, public_procedure, user_procedure
from app.services import user_service
from app.services.role_filter import parse_role_filter

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/username-check", response_model=UsernameAvailability)
async def username_check(
    username: str = Query(..., min_length=1),
    ctx: RequestContext = Depends(public_procedure),
    db: AsyncSession = Depends(get_db),
):
    await user_service.check_username(db, site_id=ctx.require_site(), username=username)
    return UsernameAvailability(username=username, available=True)


@router.get("/me", response_model=UserRead)
async def get_me(
    ctx: RequestContext = Depends(user_procedure),
    db: AsyncSession = Depends(get_db),
):
    """
    The signed-in end user, on the site their session was issued for.
    """
    return await user_service.get_signed_in_user(
        db,
        site_id=ctx.require_site(),
        user_id=ctx.user_session.subject,
    )


@router.get("", response_model=UserPage)
async def list_users(
    limit: int = Query(10, ge=1, le=100),
    role: Optional[List[str]] = Query(None, description="Repeat to match any of several roles"),
    cursor: Optional[int] = Query(None),
    ctx: RequestContext = Depends(admin_procedure),
    db: AsyncSession = Depends(get_db),
):
    page = await user_service.list_users(
        db,
        site_id=ctx.require_site(),
        limit=limit,
        role_filter=parse_role_filter(role),
        cursor=cursor,
    )
    return UserPage(users=page.items, next_cursor=page.next_cursor)


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    user_in: UserCreate,
    ctx: RequestContext = Depends(admin_procedure),
    db: AsyncSession = Depends(get_db),
):
    return await user_service.create_user(db, site_id=ctx.require_site(), user_in=user_in)


@router.get("/{user_id}", response_model=Optional[UserRead])
async def get_user(
    user_id: int,
    ctx: RequestContext = Depends(admin_procedure),
    db: AsyncSession = Depends(get_db),
):
    """
    Returns null for an unknown id; callers decide whether that is a 404.
    """
    return await user_service.get_user(db, user_id=user_id)


@router.patch("/{user_id}", response_model=UserRead)
async def update_user(
    user_id: int,
    user_in: UserUpdate,
    ctx: RequestContext = Depends(admin_procedure),
    db: AsyncSession = Depends(get_db),
):
    return await user_service.update_user(db, user_id=user_id, user_in=user_in)
