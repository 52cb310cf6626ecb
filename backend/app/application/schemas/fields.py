"""Shared pydantic building blocks for resource payload schemas."""

import re
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^[\+]?[\d\-\s\(\)]{7,20}$")
MIN_PASSWORD_LENGTH = 8


class PayloadModel(BaseModel):
    """Base for request payloads.

    Wire names are camelCase, strings are trimmed, unknown keys are dropped.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        str_strip_whitespace=True,
        extra="ignore",
    )


def _check_email(value: str) -> str:
    if not EMAIL_PATTERN.match(value):
        raise PydanticCustomError("email", "Please provide a valid email address")
    return value


def _check_phone(value: str) -> str:
    if not PHONE_PATTERN.match(value):
        raise PydanticCustomError(
            "phone",
            "Please provide a valid phone number "
            "(7-20 characters, can include +, -, spaces, parentheses)",
        )
    return value


def _check_password(value: str) -> str:
    if len(value) < MIN_PASSWORD_LENGTH:
        raise PydanticCustomError(
            "password_length",
            "Password must be at least {min_length} characters long",
            {"min_length": MIN_PASSWORD_LENGTH},
        )
    if not (
        any(c.islower() for c in value)
        and any(c.isupper() for c in value)
        and any(c.isdigit() for c in value)
    ):
        raise PydanticCustomError(
            "password_complexity",
            "Password must contain at least one uppercase letter, "
            "one lowercase letter, and one number",
        )
    return value


Email = Annotated[str, AfterValidator(_check_email)]
Phone = Annotated[str, AfterValidator(_check_phone)]
Password = Annotated[str, AfterValidator(_check_password)]
