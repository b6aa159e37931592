"""
Standalone CMake plugin.

Applying the plugin creates the ``cmake`` extension and three tasks:

- ``cmakeConfigure`` generates the build tree in the working folder
- ``cmakeBuild`` builds the configured tree (optionally a single target)
- ``cmakeClean`` runs the ``clean`` target of an existing build tree
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

from nativebuild.core.exceptions import ConfigurationError
from nativebuild.plugins.base import Plugin

logger = logging.getLogger(__name__)

CMAKE_DIR_PROPERTY = "cmake.dir"

CONFIGURE_TASK_NAME = "cmakeConfigure"
BUILD_TASK_NAME = "cmakeBuild"
CLEAN_TASK_NAME = "cmakeClean"


def find_cmake(project: Any) -> str:
    """
    Return the cmake executable for a project.

    Uses ``<cmake.dir>/bin/cmake`` when the ``cmake.dir`` project property is
    set, otherwise relies on ``cmake`` being on the PATH.
    """
    cmake_dir = project.get_property(CMAKE_DIR_PROPERTY)
    if cmake_dir:
        return str(Path(cmake_dir) / "bin" / "cmake")
    return "cmake"


def format_flags(variable: str, flags: List[str]) -> List[str]:
    """Return a ``-D<variable>=<flags>`` definition, or nothing when empty."""
    if not flags:
        return []
    return [f"-D{variable}={' '.join(flags)}"]


@dataclass
class CMakeExtension:
    """
    Configuration of the ``cmake`` extension.

    Attributes:
        working_folder: Build tree location
        source_folder: Directory containing the top-level CMakeLists.txt
        build_config: Build type / configuration (e.g. 'Release')
        build_target: Target passed to ``cmake --build --target``
        install_prefix: Value of CMAKE_INSTALL_PREFIX
        arguments: Extra configure arguments
        c_flags: CMAKE_C_FLAGS entries
        cpp_flags: CMAKE_CXX_FLAGS entries
        executable: Explicit cmake executable (default: see find_cmake)
    """

    working_folder: Optional[Path] = None
    source_folder: Optional[Path] = None
    build_config: Optional[str] = None
    build_target: Optional[str] = None
    install_prefix: Optional[str] = None
    arguments: List[str] = field(default_factory=list)
    c_flags: List[str] = field(default_factory=list)
    cpp_flags: List[str] = field(default_factory=list)
    executable: Optional[str] = None


class CMakePlugin(Plugin):
    """Drives a CMake build tree directly."""

    plugin_id = "cmake"

    def apply(self, project: Any) -> None:
        self.project = project
        self.extension = project.extensions.create("cmake", CMakeExtension)

        project.tasks.register(
            CONFIGURE_TASK_NAME,
            self._configure,
            description="Configures the CMake build tree.",
        )
        project.tasks.register(
            BUILD_TASK_NAME,
            self._build,
            description="Builds the configured CMake build tree.",
        ).depends_on(CONFIGURE_TASK_NAME)
        project.tasks.register(
            CLEAN_TASK_NAME,
            self._clean,
            description="Cleans the CMake build tree.",
        )

    def _cmake(self) -> str:
        return self.extension.executable or find_cmake(self.project)

    def _working_folder(self) -> Path:
        working_folder = self.extension.working_folder or self.project.build_dir
        return self.project.file(working_folder)

    def configure_command(self) -> List[str]:
        """
        Build the ``cmake`` configure command line.

        Raises:
            ConfigurationError: If no source folder is configured
        """
        ext = self.extension
        if ext.source_folder is None:
            raise ConfigurationError("cmake.sourceFolder is not set")

        command = [
            self._cmake(),
            "-S",
            str(self.project.file(ext.source_folder)),
            "-B",
            str(self._working_folder()),
        ]
        if ext.build_config:
            command.append(f"-DCMAKE_BUILD_TYPE={ext.build_config}")
        if ext.install_prefix:
            command.append(f"-DCMAKE_INSTALL_PREFIX={ext.install_prefix}")
        command.extend(format_flags("CMAKE_C_FLAGS", ext.c_flags))
        command.extend(format_flags("CMAKE_CXX_FLAGS", ext.cpp_flags))
        command.extend(ext.arguments)
        return command

    def build_command(self, target: Optional[str] = None) -> List[str]:
        """Build the ``cmake --build`` command line."""
        command = [self._cmake(), "--build", str(self._working_folder())]
        if self.extension.build_config:
            command.extend(["--config", self.extension.build_config])
        if target:
            command.extend(["--target", target])
        return command

    def _configure(self, task) -> None:
        working_folder = self._working_folder()
        working_folder.mkdir(parents=True, exist_ok=True)
        self.project.exec(working_folder, self.configure_command())

    def _build(self, task) -> None:
        command = self.build_command(self.extension.build_target)
        self.project.exec(self._working_folder(), command)

    def _clean(self, task) -> None:
        working_folder = self._working_folder()
        if not (working_folder / "CMakeCache.txt").exists():
            logger.info(f"No CMake build tree in {working_folder}, nothing to clean")
            return
        self.project.exec(working_folder, self.build_command("clean"))
