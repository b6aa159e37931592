"""
Project model for nativebuild.

A Project holds everything a build needs during its two phases:

1. Configuration: plugins are applied, extensions are configured and tasks
   are registered. Work that depends on the complete configuration is
   queued with ``after_evaluate``.
2. Execution: ``evaluate()`` runs the queued hooks once, then ``execute()``
   runs the requested tasks and their dependencies in order.
"""

import logging
import shutil
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Union

from nativebuild.core.exceptions import DuplicateExtensionError, PluginError
from nativebuild.core.locking import build_lock
from nativebuild.core.process import run_process
from nativebuild.core.tasks import Task, TaskContainer, TaskGraph
from nativebuild.plugins.registry import PluginRegistry, get_global_registry

logger = logging.getLogger(__name__)

ProjectHook = Callable[["Project"], None]

CLEAN_TASK_NAME = "clean"


class ExtensionContainer:
    """Named configuration objects contributed by plugins."""

    def __init__(self):
        self._extensions: Dict[str, Any] = {}

    def create(self, name: str, factory: Callable[..., Any], *args, **kwargs) -> Any:
        """
        Instantiate ``factory(*args, **kwargs)`` and register it under ``name``.

        Raises:
            DuplicateExtensionError: If the name is taken
        """
        if name in self._extensions:
            raise DuplicateExtensionError(name)
        extension = factory(*args, **kwargs)
        self._extensions[name] = extension
        logger.debug(f"Created extension '{name}' ({type(extension).__name__})")
        return extension

    def get_by_name(self, name: str) -> Any:
        if name not in self._extensions:
            raise PluginError(f"Extension with name '{name}' does not exist")
        return self._extensions[name]

    def __contains__(self, name: object) -> bool:
        return name in self._extensions


class Project:
    """
    A buildable project.

    Attributes:
        project_dir: Absolute project root directory
        name: Project name (defaults to the directory name)
        build_dir: Output directory, removed by the ``clean`` task
        properties: Project properties (``cmake.dir``, ``kernel.build.target``, ...)
        start_task_names: Task names requested for this build
        tasks: Task container
        extensions: Extension container
    """

    def __init__(
        self,
        project_dir: Union[str, Path],
        name: Optional[str] = None,
        build_dir: Optional[Union[str, Path]] = None,
        properties: Optional[Dict[str, Any]] = None,
        start_task_names: Optional[Sequence[str]] = None,
        plugin_registry: Optional[PluginRegistry] = None,
    ):
        self.project_dir = Path(project_dir).resolve()
        self.name = name or self.project_dir.name
        self.build_dir = (
            self.file(build_dir) if build_dir else self.project_dir / "build"
        )
        self.properties: Dict[str, Any] = dict(properties or {})
        self.start_task_names: List[str] = list(start_task_names or [])
        self.tasks = TaskContainer()
        self.extensions = ExtensionContainer()

        self._plugin_registry = plugin_registry or get_global_registry()
        self._applied_plugins: List[str] = []
        self._after_evaluate: List[ProjectHook] = []
        self._evaluated = False

        self.tasks.register(
            CLEAN_TASK_NAME,
            self._delete_build_dir,
            description="Deletes the build directory.",
        )

    # ========================================================================
    # Properties and Paths
    # ========================================================================

    def get_property(self, key: str, default: Any = None) -> Any:
        """
        Look up a project property.

        Empty strings are treated as unset.
        """
        value = self.properties.get(key)
        if value is None or value == "":
            return default
        return value

    def file(self, path: Union[str, Path]) -> Path:
        """Resolve a path relative to the project directory."""
        path = Path(path)
        if not path.is_absolute():
            path = self.project_dir / path
        return path

    # ========================================================================
    # Plugins
    # ========================================================================

    def apply_plugin(self, plugin_id: str) -> None:
        """
        Apply a registered plugin. Applying the same plugin twice is a no-op.

        Raises:
            PluginNotFoundError: If no plugin is registered under the id
        """
        if self.has_plugin(plugin_id):
            logger.debug(f"Plugin '{plugin_id}' already applied to {self.name}")
            return
        plugin_class = self._plugin_registry.get_plugin(plugin_id)
        logger.debug(f"Applying plugin '{plugin_id}' to {self.name}")
        self._applied_plugins.append(plugin_id)
        plugin_class().apply(self)

    def has_plugin(self, plugin_id: str) -> bool:
        return plugin_id in self._applied_plugins

    # ========================================================================
    # Evaluation
    # ========================================================================

    @property
    def evaluated(self) -> bool:
        return self._evaluated

    def after_evaluate(self, hook: ProjectHook) -> None:
        """
        Run ``hook(project)`` once configuration is complete.

        Hooks run in registration order. A hook registered after the project
        has been evaluated runs immediately.
        """
        if self._evaluated:
            hook(self)
        else:
            self._after_evaluate.append(hook)

    def evaluate(self) -> None:
        """
        Finish configuration by running the queued ``after_evaluate`` hooks.

        Hooks queued by other hooks run in the same pass. Subsequent calls
        are no-ops.
        """
        if self._evaluated:
            return
        logger.debug(f"Evaluating project {self.name}")
        while self._after_evaluate:
            hook = self._after_evaluate.pop(0)
            hook(self)
        self._evaluated = True

    # ========================================================================
    # Execution
    # ========================================================================

    def exec(self, working_dir: Union[str, Path], command_line: Sequence[str]) -> int:
        """
        Run an external command synchronously.

        Raises:
            ProcessExecutionError: If the command cannot start or exits non-zero
        """
        return run_process(command_line, self.file(working_dir))

    def execute(
        self, task_names: Optional[Iterable[str]] = None, lock_timeout: float = 60
    ) -> List[Task]:
        """
        Evaluate the project if needed, then run the requested tasks.

        Args:
            task_names: Tasks to run (default: ``start_task_names``)
            lock_timeout: Seconds to wait for the project build lock

        Returns:
            Executed tasks in execution order
        """
        self.evaluate()
        if task_names is None:
            task_names = self.start_task_names
        names = list(task_names)
        plan = TaskGraph(self.tasks).plan(names)
        logger.debug(f"Task plan: {', '.join(task.name for task in plan)}")

        with build_lock(self.project_dir, timeout=lock_timeout):
            for task in plan:
                task.execute()
        return plan

    def _delete_build_dir(self, task: Task) -> None:
        if self.build_dir.exists():
            logger.info(f"Deleting {self.build_dir}")
            shutil.rmtree(self.build_dir)

    def __repr__(self) -> str:
        return f"Project({self.name!r}, {str(self.project_dir)!r})"
