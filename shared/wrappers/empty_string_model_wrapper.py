import re
from pydantic import BaseModel, model_validator
from typing import Any, List, Union, get_args, get_origin

INVISIBLE_CHARS_PATTERN = re.compile(
    r'[\u200e\u200f\u202a-\u202e\u2066-\u2069\ufeff]')


def deep_clean(value: Any):
    """Recursively strip strings, drop invisible chars and turn empty strings into None."""

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


class EmptyStringModel(BaseModel):
    model_config = {
        "populate_by_name": True,
        "from_attributes": True,
    }

    @model_validator(mode="before")
    @classmethod
    def clean_input(cls, values):
        if isinstance(values, dict):
            return deep_clean(values)
        return values

    @model_validator(mode="after")
    def finalize_nulls(self):
        """None -> [] for list fields and "" for plain string fields."""
        for field_name, field in type(self).model_fields.items():
            if getattr(self, field_name) is not None:
                continue

            annotation = field.annotation
            origin = get_origin(annotation)
            args = get_args(annotation)

            if origin in (list, List) or annotation in (list, List):
                object.__setattr__(self, field_name, [])
            elif annotation == str or (origin is Union and args == (str, type(None))):
                object.__setattr__(self, field_name, "")

        return self
