import secrets
import string
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

from jose import jwt
from passlib.context import CryptContext

from app.core.config import settings

pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto"
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    return pwd_context.verify(password, hashed)


def generate_password(length: int = 24) -> str:
    """
    Strong random password for seeded accounts
    """
    alphabet = string.ascii_letters + string.digits + "_-"
    return "".join(secrets.choice(alphabet) for _ in range(length))


def create_session_token(
    *,
    realm: str,
    subject: int,
    site_id: Optional[UUID] = None,
    expires_delta: Optional[timedelta] = None,
) -> tuple[str, datetime]:
    """
    Returns the signed token and its expiry.
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.SESSION_TTL_MINUTES))
    claims = {
        "sub": str(subject),
        "realm": realm,
        "iat": now,
        "exp": expire,
        "jti": uuid.uuid4().hex,
    }
    if site_id is not None:
        claims["site"] = str(site_id)
    token = jwt.encode(claims, settings.SESSION_SECRET, algorithm=settings.SESSION_ALGORITHM)
    return token, expire


def decode_session_token(token: str) -> dict:
    """
    Raises jose.JWTError (including ExpiredSignatureError) on a bad token.
    """
    return jwt.decode(
        token,
        settings.SESSION_SECRET,
        algorithms=[settings.SESSION_ALGORITHM],
    )
