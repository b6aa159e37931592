"""
Tests for the Android backend.
"""

from unittest.mock import patch

import pytest

from nativebuild.backends import create_external_native_build
from nativebuild.backends.android import (
    DEFAULT_VARIANT,
    AndroidBackend,
    derive_active_variant,
    task_build_variant,
)
from nativebuild.core.exceptions import ConfigurationError
from nativebuild.core.project import Project
from nativebuild.plugins.android import LibraryVariant, intermediates_dir
from nativebuild.tasks import POST_BUILD_TASK_NAME, PRE_BUILD_TASK_NAME

NDK_ARGUMENT = "-DCMAKE_ANDROID_NDK=C:/Android/sdk/ndk/25.1.8937393"
VARIANTS = ["debug", "release"]


@pytest.fixture
def backend(android_project):
    return create_external_native_build(android_project)


def cmake_options(backend):
    return backend.android.default_config.external_native_build.cmake


class TestDeriveActiveVariant:
    """Test variant selection from the requested task names."""

    def test_no_tasks_defaults_to_release(self):
        assert derive_active_variant(VARIANTS, []) == DEFAULT_VARIANT

    def test_unrelated_tasks_default_to_release(self):
        assert derive_active_variant(VARIANTS, ["clean", "tasks"]) == "release"

    def test_debug_task(self):
        assert derive_active_variant(VARIANTS, ["assembleDebug"]) == "debug"

    def test_release_wins_when_requested(self):
        """Test release is preferred whenever it is among the active variants."""
        assert (
            derive_active_variant(VARIANTS, ["assembleDebug", "assembleRelease"])
            == "release"
        )

    def test_first_match_in_task_order(self):
        variants = ["debug", "staging", "release"]

        assert (
            derive_active_variant(variants, ["assembleStaging", "assembleDebug"])
            == "staging"
        )

    def test_declaration_order_within_one_task(self):
        """Test variants matching the same task are taken in declaration order."""
        variants = ["staging", "debug", "release"]

        assert derive_active_variant(variants, ["assembleDebugStaging"]) == "staging"

    def test_match_is_case_sensitive(self):
        assert derive_active_variant(VARIANTS, ["debugTools"]) == "release"

    def test_single_declared_variant(self):
        assert derive_active_variant(["debug"], ["bundleDebugAar"]) == "debug"


class TestTaskBuildVariant:
    def test_suffix_match(self):
        assert task_build_variant(VARIANTS, "externalNativeBuildDebug") == "debug"

    def test_longest_match(self):
        variants = ["release", "freeRelease"]

        assert (
            task_build_variant(variants, "externalNativeBuildFreeRelease")
            == "freeRelease"
        )

    def test_no_match(self):
        assert task_build_variant(VARIANTS, "clean") is None


class TestAndroidBackendInitialization:
    """Test plugin initialization."""

    def test_construction_is_lazy(self, backend):
        assert not backend.plugin_initialized
        assert cmake_options(backend).arguments == []

    def test_ndk_argument_uses_forward_slashes(self, backend):
        backend.init()

        assert cmake_options(backend).arguments == [NDK_ARGUMENT]

    def test_initialization_replaces_existing_arguments(self, backend):
        cmake_options(backend).arguments = ["-DSTALE=1"]

        backend.init()

        assert cmake_options(backend).arguments == [NDK_ARGUMENT]

    def test_applies_plugin_when_missing(self, project_dir):
        """Test the backend applies the Android plugin itself."""
        project = Project(project_dir, properties={"kernel.build.target": "android"})
        backend = AndroidBackend(project)

        with pytest.raises(ConfigurationError, match="NDK location not found"):
            backend.init()

        assert project.has_plugin("com.android.library")
        assert not backend.plugin_initialized


class TestAndroidBackendSetters:
    """Test configuration forwarding to the android extension."""

    def test_arguments_appended_after_ndk(self, backend):
        backend.set_arguments("-DENGINE_ENABLED=ON")
        backend.set_arguments("-DA=1", "-DB=2")

        assert cmake_options(backend).arguments == [
            NDK_ARGUMENT,
            "-DENGINE_ENABLED=ON",
            "-DA=1",
            "-DB=2",
        ]

    def test_flags_replace(self, backend):
        backend.set_c_flags("-O1")
        backend.set_c_flags("-O2")
        backend.set_cpp_flags("-std=c++17", "-fexceptions")

        assert cmake_options(backend).c_flags == ["-O2"]
        assert cmake_options(backend).cpp_flags == ["-std=c++17", "-fexceptions"]

    def test_path(self, backend):
        backend.set_path("src/main/cpp/CMakeLists.txt")

        assert backend.android.external_native_build.cmake.path == (
            "src/main/cpp/CMakeLists.txt"
        )
        assert backend.tasks_registered

    def test_unsupported_settings_ignored(self, backend):
        backend.set_working_folder("out")
        backend.set_install_prefix("dist")

        assert backend.plugin_initialized
        assert backend.android.external_native_build.cmake.path is None

    def test_build_target(self, backend):
        backend.set_build_target("install")

        assert backend.requested_build_target == "install"


class TestAndroidBackendTasks:
    """Test lifecycle wiring and the build target step."""

    def configure(self, project_dir, task_names, build_target=None):
        project = Project(
            project_dir,
            properties={"kernel.build.target": "android"},
            start_task_names=task_names,
        )
        project.apply_plugin("com.android.library")
        android = project.extensions.get_by_name("android")
        android.ndk_directory = "/opt/android/ndk"
        android.default_config.ndk.abi_filters = ["arm64-v8a", "armeabi-v7a"]
        backend = create_external_native_build(project)
        if build_target:
            backend.set_build_target(build_target)
        backend.set_path("src/main/cpp/CMakeLists.txt")
        return project, backend

    def test_wired_to_release_by_default(self, project_dir):
        project, _ = self.configure(project_dir, [POST_BUILD_TASK_NAME])
        project.evaluate()

        assert project.tasks.get_by_name(POST_BUILD_TASK_NAME).dependencies == [
            "externalNativeBuildRelease"
        ]
        assert project.tasks.get_by_name("externalNativeBuildRelease").dependencies == [
            PRE_BUILD_TASK_NAME
        ]
        assert project.tasks.get_by_name("externalNativeBuildDebug").dependencies == []

    def test_wired_to_requested_variant(self, project_dir):
        project, _ = self.configure(project_dir, ["assembleDebug"])
        project.evaluate()

        assert project.tasks.get_by_name(POST_BUILD_TASK_NAME).dependencies == [
            "externalNativeBuildDebug"
        ]

    def test_variants_declared_after_facade_are_seen(self, project_dir):
        """Test the variant is derived from the final configuration."""
        project, backend = self.configure(project_dir, ["assembleStaging"])
        backend.android.library_variants.append(LibraryVariant("staging"))
        project.evaluate()

        assert project.tasks.get_by_name(POST_BUILD_TASK_NAME).dependencies == [
            "externalNativeBuildStaging"
        ]

    def test_no_clean_edges(self, project_dir):
        project, _ = self.configure(project_dir, [])
        project.evaluate()

        assert project.tasks.get_by_name("externalNativeBuildClean").dependencies == []

    def test_no_build_target_no_extra_step(self, project_dir, mock_run_process):
        project, _ = self.configure(project_dir, [POST_BUILD_TASK_NAME])

        project.execute()

        # configure and build per ABI
        assert mock_run_process.call_count == 4

    def test_build_target_step_per_abi(self, project_dir, mock_run_process):
        """Test the requested target is built once in every ABI build tree."""
        project, _ = self.configure(
            project_dir, [POST_BUILD_TASK_NAME], build_target="install"
        )

        project.execute()

        calls = mock_run_process.call_args_list
        assert len(calls) == 6
        target_calls = calls[4:]
        assert [c.args[0] for c in target_calls] == [
            ["cmake", "--build", ".", "--target", "install"],
            ["cmake", "--build", ".", "--target", "install"],
        ]
        assert [c.args[1] for c in target_calls] == [
            intermediates_dir(project.project_dir, "release", "arm64-v8a"),
            intermediates_dir(project.project_dir, "release", "armeabi-v7a"),
        ]

    def test_build_target_step_uses_cmake_dir(self, project_dir, mock_run_process):
        project, _ = self.configure(
            project_dir, ["assembleDebug", POST_BUILD_TASK_NAME], build_target="install"
        )
        project.properties["cmake.dir"] = "/opt/cmake"

        project.execute([POST_BUILD_TASK_NAME])

        last = mock_run_process.call_args_list[-1]
        assert last.args[0][0].endswith("cmake")
        assert last.args[0][0].startswith("/opt/cmake")
        assert last.args[1] == intermediates_dir(
            project.project_dir, "debug", "armeabi-v7a"
        )

    def test_variant_derived_once(self, project_dir):
        """Test the build target step reuses the names resolved by the wiring."""
        with patch(
            "nativebuild.backends.android.derive_active_variant",
            wraps=derive_active_variant,
        ) as mock_derive:
            project, _ = self.configure(
                project_dir, [POST_BUILD_TASK_NAME], build_target="install"
            )
            project.evaluate()

        # once for the pre edges, once for the post edges
        assert mock_derive.call_count == 2
        release = project.tasks.get_by_name("externalNativeBuildRelease")
        assert len(release.actions) == 2

    def test_build_target_step_attached_once(self, project_dir):
        project, backend = self.configure(
            project_dir, [POST_BUILD_TASK_NAME], build_target="install"
        )
        backend.set_path("src/main/cpp/CMakeLists.txt")
        project.evaluate()

        # plugin action plus one build target step
        assert len(project.tasks.get_by_name("externalNativeBuildRelease").actions) == 2


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
