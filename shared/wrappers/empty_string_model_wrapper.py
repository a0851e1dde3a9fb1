from datetime import date, datetime
import re
from pydantic import BaseModel, model_validator
from typing import Any, Union, get_args, get_origin

INVISIBLE_CHARS_PATTERN = re.compile(
    r'[\u200e\u200f\u202a-\u202e\u2066-\u2069\ufeff]')


def deep_clean(value: Any):
    """Recursively convert empty strings to None and strip invisible chars."""

    if isinstance(value, BaseModel):
        return type(value)(**deep_clean(value.model_dump()))

    if isinstance(value, dict):
        return {k: deep_clean(v) for k, v in value.items()}

    if isinstance(value, list):
        return [deep_clean(v) for v in value]

    if isinstance(value, str):
        cleaned = INVISIBLE_CHARS_PATTERN.sub("", value).strip()
        return None if cleaned == "" else cleaned

    return value


def safe_parse_date(value: Any):
    """Convert date strings to date, return None if invalid."""
    if value is None or value == "":
        return None

    if isinstance(value, (date, datetime)):
        return value

    try:
        return datetime.fromisoformat(value).date()
    except (TypeError, ValueError):
        return None


def _is_date_annotation(annotation) -> bool:
    if annotation in (date, datetime):
        return True
    return get_origin(annotation) is Union and any(
        a in (date, datetime) for a in get_args(annotation))


class EmptyStringModel(BaseModel):
    """Base for query params and envelopes: blank strings and unparsable dates become None."""

    model_config = {
        "populate_by_name": True,
        "from_attributes": True,
    }

    @model_validator(mode="before")
    @classmethod
    def clean_input(cls, values):
        if not isinstance(values, dict):
            return values

        values = deep_clean(values)
        for field_name, field in cls.model_fields.items():
            if field_name in values and _is_date_annotation(field.annotation):
                values[field_name] = safe_parse_date(values[field_name])
        return values
