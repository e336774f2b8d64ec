"""
Procedure guards.

Every route depends on exactly one of ``public_procedure``,
``user_procedure`` or ``admin_procedure``. The realm check happens before the
tenant lookup, so an unauthorized call never touches the database.
"""
import enum

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.errors import ApiError, ErrorKind
from app.core.logging import get_logger
from app.db.session import get_db
from app.security.context import RequestContext
from app.security.sessions import resolve_admin_session, resolve_user_session
from app.security.tenancy import current_site_id

logger = get_logger(__name__)


class ProcedureKind(str, enum.Enum):
    PUBLIC = "public"
    USER = "user"
    ADMIN = "admin"


def procedure(kind: ProcedureKind):
    """
    Factory dependency for a procedure class.
    Usage in route: ctx: RequestContext = Depends(admin_procedure)
    """
    async def guard(
        request: Request,
        db: AsyncSession = Depends(get_db),
    ) -> RequestContext:
        admin_session = resolve_admin_session(request)
        user_session = resolve_user_session(request)

        required = {
            ProcedureKind.ADMIN: admin_session,
            ProcedureKind.USER: user_session,
        }
        if kind in required:
            session = required[kind]
            if session is None or session.is_expired():
                logger.info("Rejected %s procedure | path=%s", kind.value, request.url.path)
                raise ApiError(ErrorKind.UNAUTHORIZED, "You must be logged in to do that.")

        if kind is ProcedureKind.USER:
            # End users belong to one site; a site header cannot move them
            site_id = user_session.site_id
        else:
            site_id = await current_site_id(
                db,
                requested=request.headers.get(settings.SITE_HEADER),
                host=request.headers.get("host"),
                admin_session=admin_session,
                user_session=user_session,
            )

        return RequestContext(
            admin_session=admin_session,
            user_session=user_session,
            site_id=site_id,
        )

    guard.__name__ = f"{kind.value}_procedure"
    return guard


public_procedure = procedure(ProcedureKind.PUBLIC)
user_procedure = procedure(ProcedureKind.USER)
admin_procedure = procedure(ProcedureKind.ADMIN)
