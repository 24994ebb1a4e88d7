from datetime import date, datetime, timezone
import re
from uuid import UUID
from pydantic import BaseModel, model_validator
from typing import Any, Union, get_args, get_origin

INVISIBLE_CHARS_PATTERN = re.compile(
    r'[\u200e\u200f\u202a-\u202e\u2066-\u2069\ufeff]')


def deep_clean(value: Any):
    """Recursively convert empty strings to None, clean invisible chars, and handle nested models."""

    # 1️⃣ Handle Pydantic models
    if isinstance(value, BaseModel):
        data = value.model_dump()
        cleaned = deep_clean(data)
        return type(value)(**cleaned)

    # 2️⃣ Handle dictionaries
    if isinstance(value, dict):
        return {k: deep_clean(v) for k, v in value.items()}

    # 3️⃣ Handle lists
    if isinstance(value, list):
        return [deep_clean(v) for v in value]

    # 4️⃣ Handle strings
    if isinstance(value, str):
        cleaned = INVISIBLE_CHARS_PATTERN.sub("", value).strip()
        return None if cleaned == "" else cleaned

    if isinstance(value, UUID):
        return value

    return value


def parse_date_value(value: Any):
    """
    Normalise a date-ish value to a ``date``.

    Accepts ``date``/``datetime`` objects, ``YYYY-MM-DD`` strings and full ISO
    datetime strings (``2025-03-01T10:00:00Z``); aware datetimes are taken in
    UTC. Empty values give None, anything else raises ValueError.
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            raise ValueError(f"Invalid date value '{value}'")
        return parse_date_value(parsed)

    raise ValueError(f"Invalid date value '{value}'")


def _is_date_annotation(annotation) -> bool:
    origin = get_origin(annotation)
    args = get_args(annotation)
    return annotation is date or (origin is Union and date in args)


class EmptyStringModel(BaseModel):
    model_config = {
        "populate_by_name": True,
        "from_attributes": True,
    }

    # STEP 1: Pre-clean input
    @model_validator(mode="before")
    @classmethod
    def clean_input(cls, values):
        if isinstance(values, dict):
            return deep_clean(values)
        return values

    # STEP 2: Normalise date fields that were actually sent
    @model_validator(mode="before")
    @classmethod
    def fix_dates(cls, values):
        if not isinstance(values, dict):
            return values

        for field_name, field in cls.model_fields.items():
            if field_name not in values:
                continue
            if _is_date_annotation(field.annotation):
                values[field_name] = parse_date_value(values[field_name])

        return values
