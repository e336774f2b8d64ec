from datetime import datetime
from typing import Annotated, List, Optional
from uuid import UUID

from pydantic import AfterValidator, ValidationInfo, field_validator, model_validator
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError

from app.schemas.base import CamelModel, blank_or, check_length


def _first_name(v: str) -> str:
    return check_length(
        v,
        min_length=1,
        max_length=100,
        too_short="You must specify a first name.",
        too_long="A shorter first name is required.",
    )


def _email(v: str) -> str:
    try:
        _, email = validate_email(v)
    except PydanticCustomError:
        raise PydanticCustomError("email", "A valid email is required.")
    return email


def _username(v: str) -> str:
    return check_length(
        v,
        min_length=3,
        max_length=32,
        too_short="Username must be at least 3 characters.",
        too_long="A shorter username is required.",
    )


def _password(v: str) -> str:
    return check_length(
        v,
        min_length=8,
        max_length=64,
        too_short="Password must be at least 8 characters.",
        too_long="A shorter password is required.",
    )


FirstName = Annotated[str, AfterValidator(_first_name)]
Email = Annotated[str, AfterValidator(_email)]
Username = Annotated[str, AfterValidator(_username)]
Password = Annotated[str, AfterValidator(_password)]


def _passwords_match(confirm: Optional[str], info: ValidationInfo) -> None:
    # password missing from info.data means it already failed its own checks
    password = info.data.get("password")
    if password and confirm != password:
        raise PydanticCustomError("password_mismatch", "Passwords don't match!")


class UserCreate(CamelModel):
    first_name: FirstName
    last_name: Optional[str] = None
    email: Email
    username: Username
    password: Password
    # Form-level only, never persisted
    confirm_password: str

    @field_validator("confirm_password")
    @classmethod
    def confirm_password_matches(cls, v: str, info: ValidationInfo) -> str:
        _passwords_match(v, info)
        return v


class UserUpdate(CamelModel):
    """
    Every field optional. An empty string means "leave unchanged", which is
    what the edit form submits for untouched inputs.
    """
    first_name: Optional[Annotated[str, AfterValidator(blank_or(_first_name))]] = None
    last_name: Optional[str] = None
    email: Optional[Annotated[str, AfterValidator(blank_or(_email))]] = None
    username: Optional[Annotated[str, AfterValidator(blank_or(_username))]] = None
    password: Optional[Annotated[str, AfterValidator(blank_or(_password))]] = None
    confirm_password: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def confirmation_always_checked(cls, data):
        # An omitted confirmation still goes through confirm_password_matches
        if isinstance(data, dict) and "confirmPassword" not in data and "confirm_password" not in data:
            data = {**data, "confirmPassword": None}
        return data

    @field_validator("confirm_password")
    @classmethod
    def confirm_password_matches(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        _passwords_match(v, info)
        return v

    def changes(self) -> dict:
        """Fields to write, with blanks and the confirmation dropped."""
        data = self.model_dump(exclude_unset=True, exclude={"confirm_password"})
        return {k: v for k, v in data.items() if v not in (None, "")}


class UserRead(CamelModel):
    id: int
    first_name: str
    last_name: Optional[str]
    email: str
    username: str
    site_id: UUID
    role_id: UUID
    created_at: datetime


class UserPage(CamelModel):
    users: List[UserRead]
    next_cursor: Optional[int] = None


class UsernameAvailability(CamelModel):
    username: str
    available: bool
