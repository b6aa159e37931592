"""
External native build facade.

This module defines the abstract base class shared by the native build
backends. Successful configuration results in the registration of three
tasks that clients may use to manage task dependencies around the native
build:

- ``preExternalNativeBuild`` executed before the native build starts
- ``postExternalNativeBuild`` executed immediately after the native build completes
- ``externalNativeBuildClean`` executes any clean tasks of the native build
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional, Union

from nativebuild.tasks.dependencies import TaskDependencySpec
from nativebuild.tasks.lifecycle import LifecycleTaskRegistrar

logger = logging.getLogger(__name__)


class FacadeState(Enum):
    """Lifecycle of a facade instance. States only ever advance."""

    UNINITIALIZED = "uninitialized"
    PLUGIN_READY = "plugin_ready"
    FULLY_REGISTERED = "fully_registered"


class NativeBuildFacade(ABC):
    """
    Uniform configuration surface over a native build plugin.

    Every setter lazily initializes the underlying plugin (at most once per
    instance). ``set_path`` additionally registers the lifecycle tasks (at
    most once per instance), since the source path is the one input that is
    strictly required before the tasks mean anything.

    Backends implement ``initialize_plugin`` and override the ``apply_*``
    hooks for the settings their plugin supports; unsupported settings are
    ignored.

    Attributes:
        project: Project the facade configures
    """

    def __init__(self, project: Any, dependencies: TaskDependencySpec):
        """
        Initialize the facade.

        Args:
            project: Project the facade configures
            dependencies: Backend task names the lifecycle tasks are wired against
        """
        self.project = project
        self._dependencies = dependencies
        self._plugin_initialized = False
        self._tasks_registered = False
        self._registrar: Optional[LifecycleTaskRegistrar] = None

    # ========================================================================
    # State
    # ========================================================================

    @property
    def plugin_initialized(self) -> bool:
        return self._plugin_initialized

    @property
    def tasks_registered(self) -> bool:
        return self._tasks_registered

    @property
    def state(self) -> FacadeState:
        if self._tasks_registered:
            return FacadeState.FULLY_REGISTERED
        if self._plugin_initialized:
            return FacadeState.PLUGIN_READY
        return FacadeState.UNINITIALIZED

    @property
    def dependencies(self) -> TaskDependencySpec:
        return self._dependencies

    def init(self, register_tasks: bool = False) -> None:
        """
        Initialize the plugin and optionally register the lifecycle tasks.

        Each activity runs at most once; repeated requests are skipped.

        Args:
            register_tasks: If True, register the lifecycle tasks. Only request
                            this once all strictly required inputs are defined.
        """
        if not self._plugin_initialized:
            logger.debug(f"Initializing {type(self).__name__} plugin")
            self.initialize_plugin()
            self._plugin_initialized = True
        if register_tasks and not self._tasks_registered:
            logger.debug(f"Registering {type(self).__name__} lifecycle tasks")
            self.register_external_native_build_tasks()
            self._tasks_registered = True

    # ========================================================================
    # Backend Hooks
    # ========================================================================

    @abstractmethod
    def initialize_plugin(self) -> None:
        """Apply and seed the underlying build plugin."""
        pass

    def register_external_native_build_tasks(self) -> None:
        """Register the lifecycle tasks and queue their dependency wiring."""
        self._registrar = LifecycleTaskRegistrar(self.project, self._dependencies)
        self._registrar.register()

    def apply_c_flags(self, flags: List[str]) -> None:
        pass

    def apply_cpp_flags(self, flags: List[str]) -> None:
        pass

    def apply_arguments(self, args: List[str]) -> None:
        pass

    def apply_build_target(self, target: Optional[str]) -> None:
        pass

    def apply_working_folder(self, folder: Optional[Path]) -> None:
        pass

    def apply_path(self, path: Optional[str]) -> None:
        pass

    def apply_install_prefix(self, prefix: Optional[str]) -> None:
        pass

    # ========================================================================
    # Configuration Surface
    # ========================================================================

    def set_c_flags(self, *flags: str) -> None:
        """Set the flags passed to the C compiler."""
        self.init()
        self.apply_c_flags(list(flags))

    def set_cpp_flags(self, *flags: str) -> None:
        """Set the flags passed to the C++ compiler."""
        self.init()
        self.apply_cpp_flags(list(flags))

    def set_arguments(self, *args: str) -> None:
        """Append CMake arguments, keeping previously configured ones."""
        self.init()
        self.apply_arguments(list(args))

    def set_build_target(self, target: Optional[str]) -> None:
        """Request a specific build target (e.g. 'install')."""
        self.init()
        self.apply_build_target(target)

    def set_working_folder(self, folder: Optional[Union[str, Path]]) -> None:
        self.init()
        self.apply_working_folder(Path(folder) if folder else None)

    def set_path(self, path: Optional[str]) -> None:
        """
        Set the CMake script of the native build.

        Registers the lifecycle tasks on first use.
        """
        self.init(register_tasks=True)
        self.apply_path(str(path) if path else None)

    def set_install_prefix(self, prefix: Optional[str]) -> None:
        self.init()
        self.apply_install_prefix(str(prefix) if prefix else None)
