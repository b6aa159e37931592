"""
External native build lifecycle tasks.
"""

from nativebuild.tasks.dependencies import TaskDependencySpec
from nativebuild.tasks.lifecycle import (
    CLEAN_HOOK_TASK_NAME,
    LIFECYCLE_TASK_NAMES,
    POST_BUILD_TASK_NAME,
    PRE_BUILD_TASK_NAME,
    LifecycleTaskRegistrar,
)

__all__ = [
    "TaskDependencySpec",
    "LifecycleTaskRegistrar",
    "PRE_BUILD_TASK_NAME",
    "POST_BUILD_TASK_NAME",
    "CLEAN_HOOK_TASK_NAME",
    "LIFECYCLE_TASK_NAMES",
]
