"""
nativebuild plugin system.

Plugins contribute extensions and tasks to a project. The built-in plugins
are the Android library plugin ('com.android.library') and the standalone
CMake plugin ('cmake').
"""

from nativebuild.plugins.base import Plugin
from nativebuild.plugins.registry import (
    PluginRegistry,
    get_global_registry,
    register_builtin_plugins,
    reset_global_registry,
)
from nativebuild.plugins.android import AndroidExtension, AndroidLibraryPlugin
from nativebuild.plugins.cmake import CMakeExtension, CMakePlugin

__all__ = [
    "Plugin",
    "PluginRegistry",
    "get_global_registry",
    "register_builtin_plugins",
    "reset_global_registry",
    "AndroidExtension",
    "AndroidLibraryPlugin",
    "CMakeExtension",
    "CMakePlugin",
]
