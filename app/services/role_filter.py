from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Union

from sqlalchemy import ColumnElement, or_

from app.models.role import Role


@dataclass(frozen=True)
class SingleRole:
    role: str


@dataclass(frozen=True)
class AnyOfRoles:
    roles: frozenset[str]


RoleFilter = Union[SingleRole, AnyOfRoles]


def parse_role_filter(values: Optional[Iterable[str]]) -> Optional[RoleFilter]:
    """
    ``?role=a`` -> SingleRole("a"); ``?role=a&role=b`` -> AnyOfRoles({"a", "b"}).
    """
    names = [v for v in (values or []) if v]
    if not names:
        return None
    if len(names) == 1:
        return SingleRole(names[0])
    return AnyOfRoles(frozenset(names))


def role_predicate(role_filter: RoleFilter) -> ColumnElement[bool]:
    if isinstance(role_filter, SingleRole):
        return Role.role == role_filter.role
    return or_(*(Role.role == name for name in sorted(role_filter.roles)))
