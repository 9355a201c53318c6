"""
Kind Plugin Base Classes

PluginMeta: declarative metadata for a plugin (name, version, kinds).
KindPlugin: abstract base class all kind plugins must subclass.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wysiwym.plugins.registry import KindRegistry


@dataclass
class PluginMeta:
    """
    Declarative metadata describing a plugin.

    Attributes:
        name:        Machine-readable slug, e.g. "paragraph", "emph".
        version:     Semver string, e.g. "1.0.0".
        description: Human-readable description.
        author:      Plugin author (defaults to "WYSIWYM Core Team").
        kinds:       Kinds the plugin registers into the kind registry.
    """

    name: str
    version: str
    description: str
    author: str = "WYSIWYM Core Team"
    kinds: list[str] = field(default_factory=list)


class KindPlugin(ABC):
    """
    Abstract base class for all kind plugins.

    A plugin owns one or more kinds: their schema fragments and both
    converters. Subclasses implement `meta` and `register`.
    """

    @property
    @abstractmethod
    def meta(self) -> PluginMeta:
        """Return the plugin's metadata."""
        ...

    @abstractmethod
    def register(self, registry: KindRegistry) -> None:
        """Register the plugin's schema fragments and converters."""
        ...
