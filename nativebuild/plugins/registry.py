"""
Plugin registry for managing build plugins.

This module provides a central registry mapping plugin ids (e.g. 'cmake',
'com.android.library') to plugin classes. Projects instantiate a fresh
plugin object each time a plugin is applied.
"""

from typing import Dict, List, Optional, Type

from nativebuild.core.exceptions import PluginNotFoundError
from nativebuild.plugins.base import Plugin


class PluginRegistry:
    """
    Registry for build plugins.

    Each plugin class is stored by id and can be retrieved later.
    """

    def __init__(self):
        """Initialize empty registry."""
        self._plugins: Dict[str, Type[Plugin]] = {}

    def register_plugin(self, plugin_id: str, plugin_class: Type[Plugin]) -> None:
        """
        Register a plugin class.

        Args:
            plugin_id: Plugin id (e.g., 'cmake')
            plugin_class: Plugin subclass applied to projects

        Raises:
            ValueError: If a plugin with the same id is already registered

        Example:
            registry.register_plugin('cmake', CMakePlugin)
        """
        if plugin_id in self._plugins:
            raise ValueError(f"Plugin '{plugin_id}' is already registered")
        self._plugins[plugin_id] = plugin_class

    def get_plugin(self, plugin_id: str) -> Type[Plugin]:
        """
        Get registered plugin class by id.

        Raises:
            PluginNotFoundError: If plugin not found
        """
        if plugin_id not in self._plugins:
            raise PluginNotFoundError(plugin_id)
        return self._plugins[plugin_id]

    def has_plugin(self, plugin_id: str) -> bool:
        return plugin_id in self._plugins

    def list_plugins(self) -> List[str]:
        """List registered plugin ids in registration order."""
        return list(self._plugins.keys())


_global_registry: Optional[PluginRegistry] = None


def get_global_registry() -> PluginRegistry:
    """
    Get the process-wide plugin registry.

    The registry is created on first call with the built-in plugins
    already registered.

    Returns:
        Global PluginRegistry instance
    """
    global _global_registry
    if _global_registry is None:
        _global_registry = PluginRegistry()
        register_builtin_plugins(_global_registry)
    return _global_registry


def reset_global_registry() -> None:
    """Discard the process-wide registry. Primarily for testing."""
    global _global_registry
    _global_registry = None


def register_builtin_plugins(registry: PluginRegistry) -> None:
    """Register the Android library and CMake plugins shipped with nativebuild."""
    from nativebuild.plugins.android import AndroidLibraryPlugin
    from nativebuild.plugins.cmake import CMakePlugin

    for plugin_class in (AndroidLibraryPlugin, CMakePlugin):
        if not registry.has_plugin(plugin_class.plugin_id):
            registry.register_plugin(plugin_class.plugin_id, plugin_class)


__all__ = [
    "PluginRegistry",
    "get_global_registry",
    "reset_global_registry",
    "register_builtin_plugins",
]
