from datetime import datetime
from typing import Annotated, List, Optional
from uuid import UUID

from pydantic import AfterValidator

from app.schemas.base import CamelModel, check_length


def _location(v: str) -> str:
    return check_length(
        v,
        min_length=1,
        max_length=255,
        too_short="A location is required.",
        too_long="A shorter location is required.",
    )


def _country(v: str) -> str:
    return check_length(
        v,
        min_length=2,
        max_length=2,
        too_short="A country is required.",
        too_long="A country is required.",
    )


def _state(v: str) -> str:
    return check_length(
        v,
        min_length=2,
        max_length=2,
        too_short="A state/province is required.",
        too_long="A state/province is required.",
    )


LocationName = Annotated[str, AfterValidator(_location)]
CountryCode = Annotated[str, AfterValidator(_country)]
StateCode = Annotated[str, AfterValidator(_state)]


class EcoLocationCreate(CamelModel):
    """
    The owning site always comes from the request context; a siteId sent by
    the client is ignored.
    """
    location: LocationName
    cn: CountryCode
    st: StateCode


class EcoLocationUpdate(CamelModel):
    location: Optional[LocationName] = None
    cn: Optional[CountryCode] = None
    st: Optional[StateCode] = None


class EcoLocationRead(CamelModel):
    id: int
    location: str
    cn: str
    st: str
    site_id: UUID
    updated_at: datetime


class EcoLocationPage(CamelModel):
    locations: List[EcoLocationRead]
    next_cursor: Optional[int] = None
