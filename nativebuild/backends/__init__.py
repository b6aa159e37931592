"""
External native build backends for nativebuild.

The backend is chosen from the project's kernel build target:

- ``java`` builds use the standalone CMake plugin (CMakeBackend)
- ``android`` builds use the Android library plugin (AndroidBackend)
"""

import logging
from typing import Any, Dict, Optional, Type

from nativebuild.backends.android import AndroidBackend
from nativebuild.backends.base import FacadeState, NativeBuildFacade
from nativebuild.backends.cmake import CMakeBackend
from nativebuild.core.exceptions import UnsupportedBuildTargetError

logger = logging.getLogger(__name__)

EXTENSION_NAME = "externalNativeBuild"
KERNEL_BUILD_TARGET_PROPERTY = "kernel.build.target"

BACKENDS: Dict[str, Type[NativeBuildFacade]] = {
    "java": CMakeBackend,
    "android": AndroidBackend,
}


def _is_true(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


def kernel_build_target(project: Any) -> Optional[str]:
    """
    Determine the kernel build target of a project.

    The ``kernel.build.target`` property wins; otherwise the boolean
    ``isJavaKernelBuild`` / ``isAndroidKernelBuild`` properties are checked.

    Returns:
        Lower-case build target name, or None if none is configured
    """
    target = project.get_property(KERNEL_BUILD_TARGET_PROPERTY)
    if target:
        return str(target).strip().lower()
    if _is_true(project.get_property("isJavaKernelBuild", False)):
        return "java"
    if _is_true(project.get_property("isAndroidKernelBuild", False)):
        return "android"
    return None


def create_external_native_build(project: Any) -> NativeBuildFacade:
    """
    Create the ``externalNativeBuild`` extension of a project.

    Args:
        project: Project to configure

    Returns:
        The backend selected for the project's kernel build target

    Raises:
        UnsupportedBuildTargetError: If the build target has no backend
        DuplicateExtensionError: If the extension already exists
    """
    target = kernel_build_target(project)
    backend_class = BACKENDS.get(target) if target else None
    if backend_class is None:
        raise UnsupportedBuildTargetError(target)

    logger.debug(f"Using {backend_class.__name__} for kernel build target '{target}'")
    return project.extensions.create(EXTENSION_NAME, backend_class, project)


__all__ = [
    "AndroidBackend",
    "CMakeBackend",
    "FacadeState",
    "NativeBuildFacade",
    "create_external_native_build",
    "kernel_build_target",
    "EXTENSION_NAME",
    "KERNEL_BUILD_TARGET_PROPERTY",
]
