import enum
import uuid

from sqlalchemy import Column, Enum, ForeignKey, String, Table, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.site import Site


class RoleDomain(str, enum.Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class RoleScope(str, enum.Enum):
    SITE = "SITE"
    DEFAULT = "DEFAULT"


role_sites = Table(
    "role_sites",
    Base.metadata,
    Column("role_id", Uuid(as_uuid=True), ForeignKey("roles.id"), primary_key=True),
    Column("site_id", Uuid(as_uuid=True), ForeignKey("sites.id"), primary_key=True),
)


class Role(Base):
    __tablename__ = "roles"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    # Display name, also what the user list filters on
    role: Mapped[str] = mapped_column(String(50), nullable=False, index=True)

    domain: Mapped[RoleDomain] = mapped_column(
        Enum(RoleDomain, name="role_domain_enum"),
        nullable=False,
    )

    scope: Mapped[RoleScope] = mapped_column(
        Enum(RoleScope, name="role_scope_enum"),
        nullable=False,
        default=RoleScope.SITE,
    )

    # Only meaningful for SITE scope
    sites: Mapped[list[Site]] = relationship(secondary=role_sites)

    def __repr__(self) -> str:
        return f"<Role id={self.id} role={self.role} {self.domain.value}/{self.scope.value}>"
