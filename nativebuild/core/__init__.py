"""
Core functionality for nativebuild.

This package contains the task model and exceptions that plugins and the
external native build facade build on. The Project model lives in
``nativebuild.core.project``.
"""

from .exceptions import (
    NativeBuildError,
    ConfigurationError,
    ConfigError,
    UnsupportedBuildTargetError,
    TaskError,
    DuplicateTaskError,
    UnknownTaskError,
    TaskCycleError,
    TaskExecutionError,
    ProcessExecutionError,
    PluginError,
    PluginNotFoundError,
    DuplicateExtensionError,
    BuildLockTimeout,
)

from .tasks import Task, TaskContainer, TaskGraph

__all__ = [
    # Exceptions
    "NativeBuildError",
    "ConfigurationError",
    "ConfigError",
    "UnsupportedBuildTargetError",
    "TaskError",
    "DuplicateTaskError",
    "UnknownTaskError",
    "TaskCycleError",
    "TaskExecutionError",
    "ProcessExecutionError",
    "PluginError",
    "PluginNotFoundError",
    "DuplicateExtensionError",
    "BuildLockTimeout",
    # Tasks
    "Task",
    "TaskContainer",
    "TaskGraph",
]
