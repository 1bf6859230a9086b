"""Pydantic models for flint.toml configuration."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

RESERVED_SECTIONS = ("flint", "common")


class FlintSection(BaseModel):
    """The ``[flint]`` metadata table."""

    model_config = ConfigDict(frozen=True)

    version: int = Field(default=1, description="Config schema version", ge=1)
    plugins_branch: str = Field(
        default="main", description="Branch of the plugin source repository"
    )


class ProjectConfig(BaseModel):
    """Parsed ``flint.toml``.

    ``common`` is shared by every plugin. Every other top-level table is a
    plugin section keyed by the plugin id; having a section is what activates
    a plugin.
    """

    model_config = ConfigDict(frozen=True)

    flint: FlintSection = Field(default_factory=FlintSection)
    common: dict[str, Any] = Field(default_factory=dict)
    plugins: dict[str, dict[str, Any]] = Field(default_factory=dict)

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> ProjectConfig:
        """Build a config from a raw TOML document.

        Raises:
            pydantic.ValidationError: If a section has the wrong shape
        """
        plugins = {key: value for key, value in data.items() if key not in RESERVED_SECTIONS}
        return cls(
            flint=data.get("flint", {}),
            common=data.get("common", {}),
            plugins=plugins,
        )

    def to_document(self) -> dict[str, Any]:
        """Inverse of :meth:`from_document`."""
        document: dict[str, Any] = {
            "flint": self.flint.model_dump(),
            "common": dict(self.common),
        }
        document.update(self.plugins)
        return document

    @property
    def plugin_ids(self) -> list[str]:
        """Ids of every plugin with a section, in file order."""
        return list(self.plugins)

    def section(self, plugin_id: str) -> dict[str, Any] | None:
        """Return the raw section for ``plugin_id`` or None."""
        return self.plugins.get(plugin_id)
