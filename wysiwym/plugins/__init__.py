"""
Kind Plugin System

Public API for the plugin system:
    PluginMeta          — plugin metadata dataclass
    KindPlugin          — abstract base class for all kind plugins
    KindRegistry        — kind → schema fragment + converters
    kind_registry       — global registry instance filled at start-up
    initialize_plugins  — register built-in plugins, validate and freeze
"""

from .base import KindPlugin, PluginMeta
from .loader import builtin_plugins, initialize_plugins
from .registry import KindRegistry, kind_registry

__all__ = ["KindPlugin", "KindRegistry", "PluginMeta", "builtin_plugins", "initialize_plugins", "kind_registry"]
