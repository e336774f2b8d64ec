from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import field_validator

from app.schemas.base import CamelModel, check_length


class EcoProjectCreate(CamelModel):
    title: str
    short_title: Optional[str] = None
    intro: Optional[str] = None
    location_id: int

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str) -> str:
        return check_length(
            v,
            min_length=1,
            max_length=255,
            too_short="A title is required.",
            too_long="A shorter title is required.",
        )


class EcoProjectRead(CamelModel):
    id: int
    title: str
    short_title: Optional[str]
    intro: Optional[str]
    location_id: int
    site_id: UUID
    created_at: datetime


class EcoProjectPage(CamelModel):
    projects: List[EcoProjectRead]
    next_cursor: Optional[int] = None
