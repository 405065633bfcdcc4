"""Parser settings loader."""

from __future__ import annotations

from pathlib import Path
from typing import Tuple

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

DEFAULT_USERNAME_FIELDS: Tuple[str, ...] = (
    "login",
    "username",
    "user",
    "account",
    "email",
    "name",
    "handle",
    "id",
    "identity",
)
DEFAULT_SECRET_FIELDS: Tuple[str, ...] = ("totp", "otp")


class ParserSettings(BaseModel):
    """Field synonyms and OTP defaults used by :class:`EntryParser`."""

    model_config = ConfigDict(frozen=True)

    username_fields: Tuple[str, ...] = DEFAULT_USERNAME_FIELDS
    secret_fields: Tuple[str, ...] = DEFAULT_SECRET_FIELDS
    default_digits: int = Field(default=6, ge=6, le=10)
    default_period: int = Field(default=30, gt=0)

    @field_validator("username_fields", "secret_fields")
    @classmethod
    def _normalize_fields(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        fields = []
        for raw in value:
            field = raw.strip().rstrip(":").strip().casefold()
            if not field or any(ch.isspace() or ch == ":" for ch in field):
                raise ValueError(f"field name {raw!r} must be a single token")
            if field not in fields:
                fields.append(field)
        if not fields:
            raise ValueError("at least one field name is required")
        return tuple(fields)

    @classmethod
    def from_file(cls, path: Path) -> "ParserSettings":
        try:
            data = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid parser settings YAML in {path}: {exc}") from exc
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ValueError(f"Invalid parser settings: {exc}") from exc
