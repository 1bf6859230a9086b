"""Plugin descriptor and metadata models."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, order=True)
class PluginDescriptor:
    """Identity and applicability of a plugin, as returned by ``Details()``.

    Field order defines the total order used for deterministic iteration.
    """

    id: str
    extensions: tuple[str, ...] = ()
    version: str = "0.0.0"
    author: str = ""
    category: str = ""


@dataclass(frozen=True, order=True)
class Plugin:
    """A discovered plugin bundle.

    Equality, hashing and ordering only consider the descriptor.
    """

    descriptor: PluginDescriptor
    location: Path = field(compare=False)

    @property
    def id(self) -> str:
        return self.descriptor.id

    @property
    def extensions(self) -> tuple[str, ...]:
        return self.descriptor.extensions
