# app/scripts/seed_site.py
import argparse
import asyncio
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import generate_password, hash_password
from app.db.session import async_session
from app.models.admin_user import AdminUser
from app.models.role import Role, RoleDomain, RoleScope
from app.models.site import Site

# -----------------------------
# Defaults
# -----------------------------
DEFAULT_SITE_NAME = "EcoToken"
DEFAULT_ROLE_NAME = "Member"
DEFAULT_ADMIN_EMAIL = "admin@ecotoken.io"


@dataclass
class SeedResult:
    site: Site
    role: Role
    admin: AdminUser
    # Only set when a new admin was created with a generated password
    generated_password: Optional[str] = None


async def seed_site(
    db: AsyncSession,
    *,
    site_name: str = DEFAULT_SITE_NAME,
    domain: Optional[str] = None,
    admin_email: str = DEFAULT_ADMIN_EMAIL,
    admin_password: Optional[str] = None,
) -> SeedResult:
    """
    Idempotent: ensures a site, the global DEFAULT USER role and an admin
    whose current site is that site.
    """
    site = (
        await db.execute(select(Site).where(Site.name == site_name))
    ).scalars().first()
    if not site:
        site = Site(name=site_name, domain=domain)
        db.add(site)
        await db.flush()

    role = (
        await db.execute(
            select(Role).where(
                Role.domain == RoleDomain.USER,
                Role.scope == RoleScope.DEFAULT,
            )
        )
    ).scalars().first()
    if not role:
        role = Role(role=DEFAULT_ROLE_NAME, domain=RoleDomain.USER, scope=RoleScope.DEFAULT)
        db.add(role)

    email = admin_email.lower()
    generated = None
    admin = (
        await db.execute(select(AdminUser).where(AdminUser.email == email))
    ).scalar_one_or_none()
    if not admin:
        if admin_password is None:
            admin_password = generated = generate_password()
        admin = AdminUser(
            first_name="Admin",
            email=email,
            password_hash=hash_password(admin_password),
            last_site_id=site.id,
        )
        db.add(admin)

    await db.commit()
    return SeedResult(site=site, role=role, admin=admin, generated_password=generated)


# -----------------------------
# Async main
# -----------------------------
async def main(args: argparse.Namespace) -> None:
    async with async_session() as db:
        result = await seed_site(
            db,
            site_name=args.site,
            domain=args.domain,
            admin_email=args.email,
            admin_password=args.password,
        )

    print(f"✅ Site: {result.site.name} (ID: {result.site.id})")
    print(f"✅ Default role: {result.role.role}")
    print(f"✅ Admin: {result.admin.email}")
    if result.generated_password:
        print(f"   → Generated password (store securely): {result.generated_password}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed a site, its default role and an admin")
    parser.add_argument("--site", default=DEFAULT_SITE_NAME)
    parser.add_argument("--domain", default=None)
    parser.add_argument("--email", default=DEFAULT_ADMIN_EMAIL)
    parser.add_argument("--password", default=None)
    asyncio.run(main(parser.parse_args()))
