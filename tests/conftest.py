import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.core.security import create_session_token, hash_password
from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.models.admin_user import AdminUser
from app.models.role import Role, RoleDomain, RoleScope
from app.models.site import Site
from app.models.user import User

TEST_PASSWORD = "Abc12345"


@pytest_asyncio.fixture
async def session_factory():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.pop(get_db, None)


async def _persist(session_factory, obj):
    async with session_factory() as session:
        session.add(obj)
        await session.commit()
        await session.refresh(obj)
        return obj


@pytest_asyncio.fixture
async def make_site(session_factory):
    async def _make(name="Green Fund", domain=None):
        return await _persist(session_factory, Site(name=name, domain=domain))
    return _make


@pytest_asyncio.fixture
async def make_role(session_factory):
    async def _make(
        role="Member",
        domain=RoleDomain.USER,
        scope=RoleScope.DEFAULT,
        sites=(),
    ):
        async with session_factory() as session:
            obj = Role(role=role, domain=domain, scope=scope)
            for site in sites:
                obj.sites.append(await session.get(Site, site.id))
            session.add(obj)
            await session.commit()
            return obj
    return _make


@pytest_asyncio.fixture
async def make_admin(session_factory):
    async def _make(email="admin@ecotoken.io", password=TEST_PASSWORD, last_site=None):
        return await _persist(
            session_factory,
            AdminUser(
                first_name="Ada",
                email=email,
                password_hash=hash_password(password),
                last_site_id=last_site.id if last_site else None,
            ),
        )
    return _make


@pytest_asyncio.fixture
async def make_user(session_factory):
    async def _make(site, role, username="jdoe", password=TEST_PASSWORD):
        return await _persist(
            session_factory,
            User(
                first_name="Jane",
                last_name="Doe",
                email=f"{username}@ecotoken.io",
                username=username,
                password_hash=hash_password(password),
                site_id=site.id,
                role_id=role.id,
            ),
        )
    return _make


def _sign_in(client, *, realm, subject, site_id=None, expires_delta=None):
    """Attach a session cookie for ``realm`` to every following request."""
    token, _ = create_session_token(
        realm=realm,
        subject=subject,
        site_id=site_id,
        expires_delta=expires_delta,
    )
    cookie = settings.ADMIN_SESSION_COOKIE if realm == "admin" else settings.USER_SESSION_COOKIE
    client.cookies.set(cookie, token)
    return token


@pytest.fixture
def sign_in(client):
    def _sign(**kwargs):
        return _sign_in(client, **kwargs)
    return _sign


@pytest_asyncio.fixture
async def tenant(make_site, make_role, make_admin):
    """
    One site with a DEFAULT USER role and a signed-in-able admin whose
    current site is that site.
    """
    site = await make_site()
    role = await make_role()
    admin = await make_admin(last_site=site)
    return site, role, admin


@pytest_asyncio.fixture
async def admin_client(client, tenant):
    _, _, admin = tenant
    _sign_in(client, realm="admin", subject=admin.id)
    return client
