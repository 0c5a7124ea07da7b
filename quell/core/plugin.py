"""Plugin management for quell.

This module provides the PluginManager class that handles input plugin
discovery via Python entry points and registration with pluggy.
"""

from __future__ import annotations

import logging
from importlib.metadata import entry_points
from pathlib import Path

import pluggy

from quell.plugin import QuellHookSpec, QuellPlugin

logger = logging.getLogger(__name__)

# Entry point group name for quell plugins
ENTRY_POINT_GROUP = "quell.plugins"

# Minimum can_handle() score for a plugin to be selected
CONFIDENCE_THRESHOLD = 0.5


class PluginError(Exception):
    """Base exception for plugin-related errors."""


class PluginConflictError(PluginError):
    """Raised when multiple plugins both claim high confidence for a file."""


class NoPluginFoundError(PluginError):
    """Raised when no plugin can handle a file."""


class PluginManager:
    """Manages plugin discovery and registration.

    Example:
        manager = PluginManager()
        manager.discover()  # Find and register entry point plugins
        manager.register(MyPlugin())  # Manually register a plugin

        name = manager.auto_detect(Path("report.json"))
        document = manager.get_plugin(name).load_document(Path("report.json"))
    """

    def __init__(self) -> None:
        """Initialize the plugin manager."""
        self.pm = pluggy.PluginManager("quell")
        self.pm.add_hookspecs(QuellHookSpec)
        self._plugins: dict[str, QuellPlugin] = {}

    def register(self, plugin: QuellPlugin) -> None:
        """Register a plugin instance.

        Registering a second plugin under an existing name replaces the first.

        Args:
            plugin: The plugin instance to register.
        """
        name = plugin.name
        if name in self._plugins:
            self.unregister(name)
        self._plugins[name] = plugin
        self.pm.register(plugin, name=name)

    def unregister(self, name: str) -> None:
        """Unregister a plugin by name.

        Args:
            name: The name of the plugin to unregister.
        """
        if name in self._plugins:
            plugin = self._plugins.pop(name)
            self.pm.unregister(plugin)

    def discover(self) -> list[str]:
        """Discover and register plugins from entry points.

        Plugins that fail to import or instantiate are logged and skipped.

        Returns:
            List of discovered plugin names.
        """
        discovered = []

        for ep in entry_points(group=ENTRY_POINT_GROUP):
            try:
                plugin_instance = ep.load()()
            except Exception as e:
                logger.warning("Skipping plugin entry point '%s': %s", ep.name, e)
                continue
            self.register(plugin_instance)
            discovered.append(plugin_instance.name)

        logger.debug("Discovered plugins: %s", ", ".join(discovered) or "(none)")
        return discovered

    def list_plugins(self) -> list[str]:
        """List all registered plugin names."""
        return list(self._plugins.keys())

    def get_plugin(self, name: str) -> QuellPlugin | None:
        """Get a plugin by name.

        Args:
            name: The name of the plugin.

        Returns:
            The plugin instance, or None if not found.
        """
        return self._plugins.get(name)

    def get_plugin_info(self, name: str) -> dict[str, str] | None:
        """Get information about a plugin.

        Args:
            name: The name of the plugin.

        Returns:
            Dictionary with plugin info (name, version, description),
            or None if not found.
        """
        plugin = self._plugins.get(name)
        if plugin is None:
            return None

        return {
            "name": plugin.name,
            "version": getattr(plugin, "version", "0.0.0"),
            "description": getattr(plugin, "description", ""),
        }

    def auto_detect(self, path: Path) -> str:
        """Select the plugin for a file by asking each one for a confidence score.

        Args:
            path: Path to the input file.

        Returns:
            Name of the only plugin with confidence >= 0.5.

        Raises:
            NoPluginFoundError: If no plugin has confidence >= 0.5.
            PluginConflictError: If multiple plugins have confidence >= 0.5.
        """
        if not self._plugins:
            raise NoPluginFoundError(
                f"No plugins registered. Cannot detect plugin for {path}"
            )

        scores: list[tuple[str, float]] = []
        for name, plugin in self._plugins.items():
            try:
                confidence = plugin.can_handle(path)
            except Exception as e:
                logger.warning("Plugin '%s' failed to check %s: %s", name, path, e)
                continue
            if confidence is not None:
                scores.append((name, float(confidence)))

        if not scores:
            raise NoPluginFoundError(f"No plugin could analyze {path}")

        high_confidence = [
            (name, score) for name, score in scores if score >= CONFIDENCE_THRESHOLD
        ]

        if not high_confidence:
            best_name, best_score = max(scores, key=lambda x: x[1])
            raise NoPluginFoundError(
                f"No plugin has confidence >= {CONFIDENCE_THRESHOLD} for {path}. "
                f"Best match: {best_name} with confidence {best_score:.2f}"
            )

        if len(high_confidence) > 1:
            conflict_info = ", ".join(
                f"{name} ({score:.2f})" for name, score in high_confidence
            )
            raise PluginConflictError(
                f"Multiple plugins claim confidence >= {CONFIDENCE_THRESHOLD} for {path}: "
                f"{conflict_info}. Use --plugin to specify which plugin to use."
            )

        return high_confidence[0][0]
