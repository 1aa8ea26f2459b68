"""Common Schemas — camelCase base model and shared field validators.

Invariants:
    - Every API schema inherits CamelModel (aliases generated, snake_case names accepted)
    - required_text() rejects missing, null and whitespace-only values with one message
"""

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SuccessResponse(CamelModel):
    """Body returned by deletes and logout."""
    success: Literal[True] = True


def required_text(value: str | None, message: str) -> str:
    """Strip and require non-empty text."""
    if value is None or not value.strip():
        raise PydanticCustomError("required_text", message)
    return value.strip()


def coerce_due_date(value: object) -> object:
    """Accept '' as no due date and bare dates (YYYY-MM-DD) as midnight."""
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        if _DATE_ONLY.match(value):
            return f"{value}T00:00:00"
    return value
