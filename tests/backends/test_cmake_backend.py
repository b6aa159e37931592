"""
Tests for the CMake backend and backend selection.
"""

import pytest

from nativebuild.backends import (
    EXTENSION_NAME,
    AndroidBackend,
    CMakeBackend,
    create_external_native_build,
    kernel_build_target,
)
from nativebuild.core.exceptions import (
    DuplicateExtensionError,
    UnsupportedBuildTargetError,
)
from nativebuild.core.project import Project
from nativebuild.core.tasks import TaskGraph
from nativebuild.tasks import (
    CLEAN_HOOK_TASK_NAME,
    POST_BUILD_TASK_NAME,
    PRE_BUILD_TASK_NAME,
)


@pytest.fixture
def java_project(project_dir):
    return Project(project_dir, properties={"kernel.build.target": "java"})


@pytest.fixture
def backend(java_project):
    return create_external_native_build(java_project)


class TestBackendSelection:
    """Test kernel build target detection and backend selection."""

    def test_java_selects_cmake(self, backend, java_project):
        assert isinstance(backend, CMakeBackend)
        assert java_project.extensions.get_by_name(EXTENSION_NAME) is backend

    def test_android_selects_android(self, android_project):
        assert isinstance(create_external_native_build(android_project), AndroidBackend)

    def test_target_case_insensitive(self, project_dir):
        project = Project(project_dir, properties={"kernel.build.target": " Java "})

        assert kernel_build_target(project) == "java"

    @pytest.mark.parametrize(
        "properties,expected",
        [
            ({"isJavaKernelBuild": True}, "java"),
            ({"isJavaKernelBuild": "true"}, "java"),
            ({"isAndroidKernelBuild": "TRUE"}, "android"),
            ({"isJavaKernelBuild": "false", "isAndroidKernelBuild": True}, "android"),
            ({}, None),
        ],
    )
    def test_boolean_properties(self, project_dir, properties, expected):
        assert kernel_build_target(Project(project_dir, properties=properties)) == (
            expected
        )

    def test_property_wins_over_booleans(self, project_dir):
        project = Project(
            project_dir,
            properties={"kernel.build.target": "android", "isJavaKernelBuild": True},
        )

        assert kernel_build_target(project) == "android"

    @pytest.mark.parametrize("properties", [{}, {"kernel.build.target": "wasm"}])
    def test_unsupported_target_raises(self, project_dir, properties):
        project = Project(project_dir, properties=properties)

        with pytest.raises(UnsupportedBuildTargetError) as exc_info:
            create_external_native_build(project)

        target = properties.get("kernel.build.target")
        assert str(exc_info.value) == (
            f"externalNativeBuild not supported for kernel build target: {target}"
        )

    def test_construction_is_lazy(self, backend, java_project):
        """Test selecting a backend does not apply any plugin."""
        assert not java_project.has_plugin("cmake")
        assert not backend.plugin_initialized

    def test_duplicate_extension_raises(self, backend, java_project):
        with pytest.raises(DuplicateExtensionError):
            create_external_native_build(java_project)


class TestCMakeBackend:
    """Test configuration forwarding to the CMake plugin."""

    def test_initialize_plugin(self, backend, java_project):
        backend.init()

        assert java_project.has_plugin("cmake")
        assert backend.cmake.working_folder == java_project.build_dir
        assert backend.cmake.build_config is None

    def test_build_config_from_property(self, project_dir):
        project = Project(
            project_dir,
            properties={"kernel.build.target": "java", "cmake.config": "Release"},
        )
        backend = create_external_native_build(project)

        backend.init()

        assert backend.cmake.build_config == "Release"

    def test_flags_replace(self, backend):
        backend.set_c_flags("-O1")
        backend.set_c_flags("-O2", "-g")
        backend.set_cpp_flags("-std=c++17")

        assert backend.cmake.c_flags == ["-O2", "-g"]
        assert backend.cmake.cpp_flags == ["-std=c++17"]

    def test_arguments_accumulate(self, backend):
        backend.set_arguments("-DA=1")
        backend.set_arguments("-DB=2", "-DC=3")

        assert backend.cmake.arguments == ["-DA=1", "-DB=2", "-DC=3"]

    def test_path_sets_source_folder(self, backend, java_project):
        backend.set_path("src/main/cpp/CMakeLists.txt")

        assert backend.cmake.source_folder == (
            java_project.project_dir / "src" / "main" / "cpp"
        )

    def test_path_none_clears_source_folder(self, backend):
        backend.set_path(None)

        assert backend.cmake.source_folder is None
        assert backend.tasks_registered

    def test_working_folder_and_install_prefix(self, backend, java_project):
        backend.set_working_folder("out/native")
        backend.set_install_prefix("dist")
        backend.set_build_target("install")

        native = java_project.project_dir / "out" / "native"
        assert backend.cmake.working_folder == native
        assert backend.cmake.install_prefix == str(java_project.project_dir / "dist")
        assert backend.cmake.build_target == "install"

    def test_working_folder_none(self, backend):
        backend.set_working_folder(None)

        assert backend.cmake.working_folder is None

    def test_lifecycle_wiring(self, backend, java_project):
        """Test the lifecycle tasks surround the CMake tasks."""
        backend.set_path("src/main/cpp/CMakeLists.txt")
        java_project.evaluate()

        graph = TaskGraph(java_project.tasks)
        assert [t.name for t in graph.plan([POST_BUILD_TASK_NAME])] == [
            PRE_BUILD_TASK_NAME,
            "cmakeConfigure",
            "cmakeBuild",
            POST_BUILD_TASK_NAME,
        ]
        assert [t.name for t in graph.plan(["clean"])] == [
            "cmakeClean",
            CLEAN_HOOK_TASK_NAME,
            "clean",
        ]

    def test_execute_end_to_end(self, backend, java_project, mock_run_process):
        backend.set_cpp_flags("-std=c++17")
        backend.set_build_target("install")
        backend.set_path("src/main/cpp/CMakeLists.txt")

        java_project.execute([POST_BUILD_TASK_NAME])

        commands = [c.args[0] for c in mock_run_process.call_args_list]
        assert len(commands) == 2
        assert "-DCMAKE_CXX_FLAGS=-std=c++17" in commands[0]
        assert commands[1][-2:] == ["--target", "install"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
