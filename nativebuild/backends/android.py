"""
Android plugin backend.

Forwards native build configuration to the ``android`` extension of the
Android library plugin.
"""

import logging
from typing import Any, Iterable, List, Optional

from nativebuild.backends.base import NativeBuildFacade
from nativebuild.plugins.android import (
    AndroidExtension,
    AndroidLibraryPlugin,
    capitalize,
    external_native_build_task_name,
    intermediates_dir,
)
from nativebuild.plugins.cmake import find_cmake
from nativebuild.tasks.dependencies import TaskDependencySpec

logger = logging.getLogger(__name__)

DEFAULT_VARIANT = "release"


def derive_active_variant(
    variant_names: Iterable[str], task_names: Iterable[str]
) -> str:
    """
    Select the variant the requested tasks build.

    A variant is active when its capitalized name appears in any requested
    task name ('assembleDebug' activates 'debug'). Requested task names are
    scanned in order and variants in declaration order, so the first active
    variant is the first match in that scan.

    Args:
        variant_names: Library variant names in declaration order
        task_names: Task names requested for the build

    Returns:
        'release' if nothing is active or 'release' is active, otherwise the
        first active variant
    """
    variants = list(variant_names)
    active: List[str] = []
    for task_name in task_names:
        for variant in variants:
            if capitalize(variant) in task_name:
                active.append(variant)

    if not active or DEFAULT_VARIANT in active:
        return DEFAULT_VARIANT
    return active[0]


def task_build_variant(variant_names: Iterable[str], task_name: str) -> Optional[str]:
    """
    Return the variant a variant-specific task belongs to.

    'externalNativeBuildDebug' belongs to 'debug'. When several variant names
    match the end of the task name, the longest wins.
    """
    matches = [name for name in variant_names if task_name.endswith(capitalize(name))]
    if not matches:
        return None
    return max(matches, key=len)


class AndroidBackend(NativeBuildFacade):
    """
    Implementation forwarding native build configuration to the Android plugin.

    The Android plugin cannot build an arbitrary CMake target (e.g. 'install').
    When a build target is requested, the backend appends a step to the
    variant's native build task that runs ``cmake --build . --target <target>``
    in every ABI build tree.
    """

    def __init__(self, project: Any):
        super().__init__(
            project,
            TaskDependencySpec(
                pre_depends=self._external_native_build_tasks,
                post_depends=self._external_native_build_tasks,
            ),
        )
        self.requested_build_target: Optional[str] = None

    @property
    def android(self) -> AndroidExtension:
        return self.project.extensions.get_by_name("android")

    def _external_native_build_tasks(self) -> List[str]:
        variant = derive_active_variant(
            self.android.variant_names(), self.project.start_task_names
        )
        return [external_native_build_task_name(variant)]

    def initialize_plugin(self) -> None:
        self.project.apply_plugin(AndroidLibraryPlugin.plugin_id)
        ndk_directory = self.android.require_ndk_directory().replace("\\", "/")
        cmake_options = self.android.default_config.external_native_build.cmake
        cmake_options.arguments = [f"-DCMAKE_ANDROID_NDK={ndk_directory}"]

    def register_external_native_build_tasks(self) -> None:
        super().register_external_native_build_tasks()
        self.project.after_evaluate(self._attach_build_target_step)

    def _attach_build_target_step(self, project: Any) -> None:
        if not self.requested_build_target:
            return
        post_depends = self._registrar.resolved_post_depends
        if not post_depends:
            return
        for name in post_depends:
            task = project.tasks.get_by_name(name)
            logger.debug(
                f"Building target '{self.requested_build_target}' after {task.name}"
            )
            task.do_last(self._build_requested_target)

    def _build_requested_target(self, task) -> None:
        cmake = find_cmake(self.project)
        variant = task_build_variant(self.android.variant_names(), task.name)
        for abi in self.android.default_config.ndk.abi_filters:
            self.project.exec(
                intermediates_dir(self.project.project_dir, variant, abi),
                [cmake, "--build", ".", "--target", self.requested_build_target],
            )

    def apply_c_flags(self, flags: List[str]) -> None:
        self.android.default_config.external_native_build.cmake.c_flags = flags

    def apply_cpp_flags(self, flags: List[str]) -> None:
        self.android.default_config.external_native_build.cmake.cpp_flags = flags

    def apply_arguments(self, args: List[str]) -> None:
        cmake_options = self.android.default_config.external_native_build.cmake
        for arg in args:
            cmake_options.arguments.append(arg)

    def apply_path(self, path: Optional[str]) -> None:
        self.android.external_native_build.cmake.path = path

    def apply_build_target(self, target: Optional[str]) -> None:
        self.requested_build_target = target
