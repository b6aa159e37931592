"""
Centralized exception hierarchy for nativebuild.

This module defines all custom exceptions used across the codebase
to provide clear exception semantics for configuration, task graph,
process and plugin failures.
"""

from pathlib import Path
from typing import List, Optional, Sequence


# ============================================================================
# Base Exceptions
# ============================================================================


class NativeBuildError(Exception):
    """Base exception for all nativebuild errors."""

    pass


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigurationError(NativeBuildError):
    """Base exception for project configuration errors."""

    pass


class ConfigError(ConfigurationError):
    """Build description parsing or validation error."""

    pass


class UnsupportedBuildTargetError(ConfigurationError):
    """Raised when the kernel build target has no external native build backend."""

    def __init__(self, build_target: Optional[str]):
        self.build_target = build_target
        super().__init__(
            f"externalNativeBuild not supported for kernel build target: {build_target}"
        )


# ============================================================================
# Task Exceptions
# ============================================================================


class TaskError(NativeBuildError):
    """Base exception for task graph errors."""

    pass


class DuplicateTaskError(TaskError):
    """Raised when a task with the same name is already registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Task '{name}' is already registered")


class UnknownTaskError(TaskError):
    """Raised when a task cannot be found by name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Task with name '{name}' not found")


class TaskCycleError(TaskError):
    """Raised when task dependencies form a cycle."""

    def __init__(self, cycle: List[str]):
        self.cycle = cycle
        super().__init__(f"Circular task dependency: {' -> '.join(cycle)}")


class TaskExecutionError(TaskError):
    """Raised when an action of a task fails."""

    def __init__(self, name: str, cause: Exception):
        self.name = name
        self.cause = cause
        super().__init__(f"Execution failed for task '{name}': {cause}")


# ============================================================================
# Process Exceptions
# ============================================================================


class ProcessExecutionError(NativeBuildError):
    """Raised when an external process cannot be started or exits non-zero."""

    def __init__(
        self,
        command_line: Sequence[str],
        working_dir: Optional[Path],
        returncode: Optional[int] = None,
        message: Optional[str] = None,
    ):
        self.command_line = list(command_line)
        self.working_dir = working_dir
        self.returncode = returncode
        if message is None:
            message = (
                f"Process '{' '.join(self.command_line)}' "
                f"finished with non-zero exit value {returncode}"
            )
        super().__init__(message)


# ============================================================================
# Plugin Exceptions
# ============================================================================


class PluginError(NativeBuildError):
    """Base exception for plugin-related errors."""

    pass


class PluginNotFoundError(PluginError):
    """Raised when a plugin id is not registered."""

    def __init__(self, plugin_id: str):
        self.plugin_id = plugin_id
        super().__init__(f"Plugin with id '{plugin_id}' not found")


class DuplicateExtensionError(PluginError):
    """Raised when an extension name is already taken on a project."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"Cannot add extension with name '{name}', "
            "as there is an extension already registered with that name"
        )


# ============================================================================
# Locking Exceptions
# ============================================================================


class BuildLockTimeout(NativeBuildError):
    """Raised when the project build lock cannot be acquired within timeout."""

    pass
