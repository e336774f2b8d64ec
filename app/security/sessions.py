"""
Session resolver.

Both realms are read independently from their own cookie. A request may
carry neither, one, or both. Anything wrong with a token (bad signature,
garbage, expired, wrong realm) is logged and treated as "no session".
"""
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from fastapi import Request, Response
from jose import JWTError

from app.core.config import settings
from app.core.logging import get_logger
from app.core.security import create_session_token, decode_session_token
from app.security.context import Realm, Session

logger = get_logger(__name__)

COOKIE_NAMES = {
    "admin": settings.ADMIN_SESSION_COOKIE,
    "user": settings.USER_SESSION_COOKIE,
}


class InvalidSession(Exception):
    pass


def _parse(token: str, realm: Realm) -> Session:
    try:
        claims = decode_session_token(token)
    except JWTError as e:
        raise InvalidSession(str(e)) from e

    if claims.get("realm") != realm:
        raise InvalidSession(f"token issued for realm {claims.get('realm')!r}")

    try:
        site = claims.get("site")
        return Session(
            realm=realm,
            subject=int(claims["sub"]),
            expires_at=datetime.fromtimestamp(int(claims["exp"]), tz=timezone.utc),
            site_id=UUID(site) if site else None,
        )
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidSession(f"malformed claims: {e}") from e


def resolve_session(request: Request, realm: Realm) -> Optional[Session]:
    token = request.cookies.get(COOKIE_NAMES[realm])
    if not token:
        return None
    try:
        return _parse(token, realm)
    except InvalidSession as e:
        logger.warning("Ignoring invalid %s session | path=%s | reason=%s", realm, request.url.path, e)
        return None


def resolve_admin_session(request: Request) -> Optional[Session]:
    return resolve_session(request, "admin")


def resolve_user_session(request: Request) -> Optional[Session]:
    return resolve_session(request, "user")


def start_session(
    response: Response,
    *,
    realm: Realm,
    subject: int,
    site_id: Optional[UUID] = None,
) -> Session:
    """Issue a token for ``subject`` and set it as the realm's cookie."""
    token, expires_at = create_session_token(realm=realm, subject=subject, site_id=site_id)
    response.set_cookie(
        key=COOKIE_NAMES[realm],
        value=token,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
        max_age=settings.SESSION_TTL_MINUTES * 60,
    )
    return Session(realm=realm, subject=subject, expires_at=expires_at, site_id=site_id)


def end_session(response: Response, realm: Realm) -> None:
    response.delete_cookie(
        key=COOKIE_NAMES[realm],
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )
