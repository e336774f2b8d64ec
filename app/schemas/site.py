from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import field_validator

from app.schemas.base import CamelModel, check_length


class SiteCreate(CamelModel):
    name: str
    domain: Optional[str] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return check_length(
            v,
            min_length=1,
            max_length=255,
            too_short="A site name is required.",
            too_long="A shorter site name is required.",
        )

    @field_validator("domain")
    @classmethod
    def normalize_domain(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip().lower()
        return v or None


class SiteRead(CamelModel):
    id: UUID
    name: str
    domain: Optional[str]
    created_at: datetime


class SitePage(CamelModel):
    websites: List[SiteRead]
    next_cursor: Optional[UUID] = None


class CurrentSite(CamelModel):
    site_id: Optional[UUID] = None


class CurrentSiteUpdate(CamelModel):
    site_id: UUID
