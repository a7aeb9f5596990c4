"""Shared schema base classes."""

from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


def normalize_email(value: str) -> str:
    """Addresses are stored and compared lower-cased."""
    return value.strip().lower()


# Validated address, lower-cased for storage and lookups
NormalizedEmail = Annotated[EmailStr, AfterValidator(normalize_email)]

# Login identifier: not format-checked, only normalized
LoginEmail = Annotated[str, Field(min_length=1), AfterValidator(normalize_email)]


class CamelModel(BaseModel):
    """Schema exchanged with clients using camelCase keys.

    Accepts both camelCase and snake_case on input; serializes camelCase.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
