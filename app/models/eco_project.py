import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class EcoProject(Base):
    __tablename__ = "eco_projects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    short_title: Mapped[str | None] = mapped_column(String(100), nullable=True)
    intro: Mapped[str | None] = mapped_column(Text, nullable=True)

    location_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("eco_locations.id"),
        nullable=False,
        index=True,
    )

    site_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("sites.id"),
        nullable=False,
        index=True,
    )

    is_delete: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=datetime.utcnow,
        nullable=False,
    )
