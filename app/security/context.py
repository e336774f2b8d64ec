from datetime import datetime, timezone
from typing import Literal, Optional
from uuid import UUID

from pydantic import ConfigDict

from app.core.errors import ApiError, ErrorKind
from app.schemas.base import CamelModel

Realm = Literal["admin", "user"]


class Session(CamelModel):
    """
    A verified session for one realm. ``site_id`` is only set for the user
    realm: end users belong to exactly one site.
    """
    model_config = ConfigDict(frozen=True)

    realm: Realm
    subject: int
    expires_at: datetime
    site_id: Optional[UUID] = None

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return self.expires_at <= now


class RequestContext(CamelModel):
    """
    Trusted request context.
    This is the only object handlers should ever trust for identity + tenant info.
    Built once per request by the procedure guards and never mutated.
    """
    model_config = ConfigDict(frozen=True)

    admin_session: Optional[Session] = None
    user_session: Optional[Session] = None
    site_id: Optional[UUID] = None

    def require_site(self) -> UUID:
        if self.site_id is None:
            raise ApiError(ErrorKind.TENANT_REQUIRED, "A site must be selected for this request.")
        return self.site_id

    def require_admin(self) -> Session:
        if self.admin_session is None:
            raise ApiError(ErrorKind.UNAUTHORIZED, "Admin session required.")
        return self.admin_session
