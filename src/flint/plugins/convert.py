"""Strict conversion of values returned by plugin scripts.

Plugin scripts are free to return anything. Each entry point has a fixed
target type and anything that does not match exactly is rejected with
:class:`ConversionError` instead of being coerced.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from flint.plugins.manifest import PluginDescriptor

_BOOL = TypeAdapter(bool)
_FILE_MAP = TypeAdapter(dict[str, str])


class ConversionError(ValueError):
    """A script value does not have the shape its entry point requires."""


class _DetailsRecord(BaseModel):
    """Shape of the mapping returned by ``Details()``."""

    model_config = ConfigDict(strict=True, extra="forbid")

    id: str = Field(min_length=1)
    extensions: list[str]
    version: str
    author: str
    category: str

    @field_validator("extensions")
    @classmethod
    def dedupe_extensions(cls, v: list[str]) -> list[str]:
        return list(dict.fromkeys(v))


def _describe(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "value"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


def to_bool(value: Any) -> bool:
    """Convert a ``Validate`` result."""
    try:
        return _BOOL.validate_python(value, strict=True)
    except ValidationError as e:
        raise ConversionError(f"expected a boolean, got {type(value).__name__}") from e


def to_file_map(value: Any) -> dict[str, str]:
    """Convert a ``Generate`` result into ``{relative path: contents}``."""
    try:
        return _FILE_MAP.validate_python(value, strict=True)
    except ValidationError as e:
        raise ConversionError(f"expected a mapping of path to contents ({_describe(e)})") from e


def to_descriptor(value: Any) -> PluginDescriptor:
    """Convert a ``Details`` result into a :class:`PluginDescriptor`."""
    try:
        record = _DetailsRecord.model_validate(value)
    except ValidationError as e:
        raise ConversionError(_describe(e)) from e
    return PluginDescriptor(
        id=record.id,
        extensions=tuple(record.extensions),
        version=record.version,
        author=record.author,
        category=record.category,
    )
