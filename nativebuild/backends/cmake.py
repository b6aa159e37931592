"""
CMake plugin backend.
"""

import logging
from pathlib import Path
from typing import Any, List, Optional

from nativebuild.backends.base import NativeBuildFacade
from nativebuild.plugins.cmake import (
    BUILD_TASK_NAME,
    CLEAN_TASK_NAME,
    CONFIGURE_TASK_NAME,
    CMakeExtension,
    CMakePlugin,
)
from nativebuild.tasks.dependencies import TaskDependencySpec

logger = logging.getLogger(__name__)

BUILD_CONFIG_PROPERTY = "cmake.config"


class CMakeBackend(NativeBuildFacade):
    """Implementation forwarding native build configuration to the CMake plugin."""

    def __init__(self, project: Any):
        super().__init__(
            project,
            TaskDependencySpec(
                pre_depends=[CONFIGURE_TASK_NAME],
                post_depends=[BUILD_TASK_NAME],
                clean_depends=[CLEAN_TASK_NAME],
            ),
        )

    @property
    def cmake(self) -> CMakeExtension:
        return self.project.extensions.get_by_name("cmake")

    def initialize_plugin(self) -> None:
        self.project.apply_plugin(CMakePlugin.plugin_id)
        self.cmake.working_folder = self.project.build_dir
        build_config = self.project.get_property(BUILD_CONFIG_PROPERTY)
        if build_config:
            logger.debug(f"Using CMake build config '{build_config}'")
            self.cmake.build_config = build_config

    def apply_c_flags(self, flags: List[str]) -> None:
        self.cmake.c_flags = flags

    def apply_cpp_flags(self, flags: List[str]) -> None:
        self.cmake.cpp_flags = flags

    def apply_arguments(self, args: List[str]) -> None:
        self.cmake.arguments.extend(args)

    def apply_build_target(self, target: Optional[str]) -> None:
        self.cmake.build_target = target

    def apply_working_folder(self, folder: Optional[Path]) -> None:
        self.cmake.working_folder = self.project.file(folder) if folder else None

    def apply_path(self, path: Optional[str]) -> None:
        # the plugin takes the source tree root, not the script
        self.cmake.source_folder = self.project.file(path).parent if path else None

    def apply_install_prefix(self, prefix: Optional[str]) -> None:
        self.cmake.install_prefix = str(self.project.file(prefix)) if prefix else None
