"""
Plugin Loader

Instantiates the built-in kind plugins selected by configuration, registers
them into a KindRegistry, then validates and freezes the registry. Called
once from main.py lifespan(), and directly by tests with a fresh registry.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from wysiwym.exceptions import RegistryError

if TYPE_CHECKING:
    from wysiwym.plugins.base import KindPlugin
    from wysiwym.plugins.registry import KindRegistry

logger = logging.getLogger(__name__)


def builtin_plugins() -> dict[str, KindPlugin]:
    """Every built-in plugin, keyed by plugin name."""
    from wysiwym.plugins.emph_plugin import EmphPlugin
    from wysiwym.plugins.hard_break_plugin import HardBreakPlugin
    from wysiwym.plugins.heading_plugin import HeadingPlugin
    from wysiwym.plugins.list_plugin import ListPlugin
    from wysiwym.plugins.paragraph_plugin import ParagraphPlugin
    from wysiwym.plugins.strong_plugin import StrongPlugin
    from wysiwym.plugins.text_plugin import TextPlugin

    plugins = [TextPlugin(), ParagraphPlugin(), HeadingPlugin(), ListPlugin(), EmphPlugin(), StrongPlugin(), HardBreakPlugin()]
    return {plugin.meta.name: plugin for plugin in plugins}


def initialize_plugins(
    registry: KindRegistry,
    enabled: Iterable[str] | None = None,
    extra: Iterable[KindPlugin] = (),
    freeze: bool = True,
) -> list[KindPlugin]:
    """
    Register built-in (and optional extra) plugins into ``registry``.

    Args:
        registry: Registry to fill; must not be frozen yet.
        enabled:  Names of built-in plugins to load; None loads all of them.
        extra:    Additional plugin instances, registered after the built-ins.
        freeze:   Validate and freeze the registry once everything is registered.

    Returns:
        The plugins that were registered, in registration order.

    Raises:
        RegistryError: an enabled plugin name is not a built-in plugin.
    """
    available = builtin_plugins()
    names = list(available) if enabled is None else list(enabled)

    unknown = [name for name in names if name not in available]
    if unknown:
        raise RegistryError(
            f"Unknown plugin(s): {', '.join(unknown)}",
            details={"available": sorted(available)},
        )

    loaded = [available[name] for name in names] + list(extra)
    for plugin in loaded:
        plugin.register(registry)
        logger.debug("Plugin registered: %s v%s (%s)", plugin.meta.name, plugin.meta.version, ", ".join(plugin.meta.kinds))

    if freeze:
        registry.validate()
        registry.freeze()

    logger.info("Plugin initialisation complete — %d plugins loaded", len(loaded))
    return loaded
