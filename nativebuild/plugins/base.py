"""
Base class for build plugins.
"""

from abc import ABC, abstractmethod
from typing import Any


class Plugin(ABC):
    """
    Base class for all nativebuild plugins.

    A plugin is applied to a project at most once. Applying it typically
    creates an extension object holding the plugin's configuration and
    registers the tasks that act on that configuration.

    Lifecycle:
        1. Plugin class registered in the PluginRegistry under ``plugin_id``
        2. ``project.apply_plugin(plugin_id)`` instantiates the class
        3. ``apply(project)`` creates extensions and tasks
        4. Deferred work runs from ``project.after_evaluate`` hooks

    Example:
        class HelloPlugin(Plugin):
            plugin_id = 'hello'

            def apply(self, project):
                project.tasks.register('hello', lambda task: print('hello'))
    """

    plugin_id: str = ""

    @abstractmethod
    def apply(self, project: Any) -> None:
        """
        Apply the plugin to a project.

        Args:
            project: Project the plugin is applied to
        """
        pass
