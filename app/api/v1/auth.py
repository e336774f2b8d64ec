from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.schemas.auth import AdminLogin, SessionState, UserLogin
from app.security.context import RequestContext, Session
from app.security.dependencies import public_procedure
from app.security.sessions import end_session, start_session
from app.services import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/admin/login", response_model=Session)
async def admin_login(
    body: AdminLogin,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    admin = await auth_service.authenticate_admin(db, email=body.email, password=body.password)
    return start_session(response, realm="admin", subject=admin.id)


@router.post("/admin/logout", status_code=status.HTTP_204_NO_CONTENT)
async def admin_logout():
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    end_session(response, "admin")
    return response


@router.post("/user/login", response_model=Session)
async def user_login(
    body: UserLogin,
    response: Response,
    ctx: RequestContext = Depends(public_procedure),
    db: AsyncSession = Depends(get_db),
):
    site_id = ctx.require_site()
    user = await auth_service.authenticate_user(
        db,
        site_id=site_id,
        username=body.username,
        password=body.password,
    )
    return start_session(response, realm="user", subject=user.id, site_id=site_id)


@router.post("/user/logout", status_code=status.HTTP_204_NO_CONTENT)
async def user_logout():
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    end_session(response, "user")
    return response


@router.get("/session", response_model=SessionState)
async def current_session(ctx: RequestContext = Depends(public_procedure)):
    return SessionState(admin=ctx.admin_session, user=ctx.user_session)
