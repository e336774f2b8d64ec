from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError


class CamelModel(BaseModel):
    """
    JSON in and out uses camelCase keys (firstName, nextCursor, ...);
    Python code keeps snake_case attribute names.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def check_length(
    value: str,
    *,
    min_length: int,
    max_length: int,
    too_short: str,
    too_long: str,
) -> str:
    if len(value) < min_length:
        raise PydanticCustomError("too_short", too_short)
    if len(value) > max_length:
        raise PydanticCustomError("too_long", too_long)
    return value


def blank_or(check):
    """Lets "" through untouched, otherwise applies ``check``."""
    def _check(value: str) -> str:
        return value if value == "" else check(value)
    return _check
