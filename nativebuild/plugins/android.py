"""
Android library plugin.

A minimal model of the Android build plugin's native build support. It
creates the ``android`` extension and, once the project is evaluated, one
``externalNativeBuild<Variant>`` task per library variant. Each task
configures and builds every ABI in ``.cxx/cmake/<variant>/<abi>/`` using
the CMake script named by ``android.external_native_build.cmake.path``.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

from nativebuild.core.exceptions import ConfigurationError
from nativebuild.plugins.base import Plugin
from nativebuild.plugins.cmake import find_cmake, format_flags

logger = logging.getLogger(__name__)

DEFAULT_ABI_FILTERS = ["arm64-v8a", "armeabi-v7a", "x86", "x86_64"]
EXTERNAL_NATIVE_BUILD_TASK_PREFIX = "externalNativeBuild"


def capitalize(name: str) -> str:
    """Upper-case the first character only ('debug' -> 'Debug')."""
    return name[:1].upper() + name[1:]


def external_native_build_task_name(variant_name: str) -> str:
    return f"{EXTERNAL_NATIVE_BUILD_TASK_PREFIX}{capitalize(variant_name)}"


def intermediates_dir(project_dir: Path, variant_name: str, abi: str) -> Path:
    """Per-variant, per-ABI CMake build tree of the Android plugin."""
    return Path(project_dir) / ".cxx" / "cmake" / variant_name / abi


@dataclass
class CMakeOptions:
    """``android.default_config.external_native_build.cmake``"""

    arguments: List[str] = field(default_factory=list)
    c_flags: List[str] = field(default_factory=list)
    cpp_flags: List[str] = field(default_factory=list)


@dataclass
class ExternalNativeBuildOptions:
    cmake: CMakeOptions = field(default_factory=CMakeOptions)


@dataclass
class NdkOptions:
    abi_filters: List[str] = field(default_factory=list)


@dataclass
class DefaultConfig:
    external_native_build: ExternalNativeBuildOptions = field(
        default_factory=ExternalNativeBuildOptions
    )
    ndk: NdkOptions = field(default_factory=NdkOptions)


@dataclass
class CMakeScript:
    """``android.external_native_build.cmake``"""

    path: Optional[str] = None


@dataclass
class ExternalNativeBuild:
    cmake: CMakeScript = field(default_factory=CMakeScript)


@dataclass
class LibraryVariant:
    """A library build variant such as 'debug' or 'release'."""

    name: str

    @property
    def build_type(self) -> str:
        return "Release" if self.name == "release" else "Debug"


def _default_variants() -> List[LibraryVariant]:
    return [LibraryVariant("debug"), LibraryVariant("release")]


@dataclass
class AndroidExtension:
    """
    Configuration of the ``android`` extension.

    ``library_variants`` is iterated in declaration order.
    """

    ndk_directory: Optional[str] = None
    default_config: DefaultConfig = field(default_factory=DefaultConfig)
    external_native_build: ExternalNativeBuild = field(
        default_factory=ExternalNativeBuild
    )
    library_variants: List[LibraryVariant] = field(default_factory=_default_variants)

    def require_ndk_directory(self) -> str:
        """
        Return the NDK location.

        Raises:
            ConfigurationError: If no NDK location is configured
        """
        if not self.ndk_directory:
            raise ConfigurationError(
                "NDK location not found. Define android.ndk_directory "
                "in the build description."
            )
        return str(self.ndk_directory)

    def variant_names(self) -> List[str]:
        return [variant.name for variant in self.library_variants]


class AndroidLibraryPlugin(Plugin):
    """Registers the per-variant native build tasks."""

    plugin_id = "com.android.library"

    def apply(self, project: Any) -> None:
        self.project = project
        self.android = project.extensions.create("android", AndroidExtension)
        project.after_evaluate(self._register_variant_tasks)

    def _register_variant_tasks(self, project: Any) -> None:
        for variant in self.android.library_variants:
            project.tasks.register(
                external_native_build_task_name(variant.name),
                self._variant_action(variant),
                description=f"Builds the native code of the {variant.name} variant.",
            )

    def _variant_action(self, variant: LibraryVariant):
        def action(task) -> None:
            self.build_variant(variant)

        return action

    def configure_command(self, variant: LibraryVariant, abi: str) -> List[str]:
        """Build the CMake configure command line for one variant and ABI."""
        android = self.android
        cmake_options = android.default_config.external_native_build.cmake
        script = android.external_native_build.cmake.path
        source_dir = self.project.file(script).parent

        command = [
            find_cmake(self.project),
            "-S",
            str(source_dir),
            "-B",
            ".",
            f"-DANDROID_ABI={abi}",
            f"-DCMAKE_BUILD_TYPE={variant.build_type}",
        ]
        if android.ndk_directory:
            toolchain = Path(android.ndk_directory) / "build" / "cmake"
            toolchain = toolchain / "android.toolchain.cmake"
            command.append(f"-DCMAKE_TOOLCHAIN_FILE={toolchain.as_posix()}")
        command.extend(format_flags("CMAKE_C_FLAGS", cmake_options.c_flags))
        command.extend(format_flags("CMAKE_CXX_FLAGS", cmake_options.cpp_flags))
        command.extend(cmake_options.arguments)
        return command

    def build_variant(self, variant: LibraryVariant) -> None:
        """Configure and build every ABI of a variant."""
        if not self.android.external_native_build.cmake.path:
            logger.info(
                f"No CMake script configured, skipping native build of {variant.name}"
            )
            return

        abis = self.android.default_config.ndk.abi_filters or DEFAULT_ABI_FILTERS
        for abi in abis:
            build_dir = intermediates_dir(self.project.project_dir, variant.name, abi)
            build_dir.mkdir(parents=True, exist_ok=True)
            self.project.exec(build_dir, self.configure_command(variant, abi))
            self.project.exec(build_dir, [find_cmake(self.project), "--build", "."])
