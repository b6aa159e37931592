"""
Pytest configuration and shared fixtures for nativebuild tests.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from nativebuild.core.project import Project
from nativebuild.plugins.registry import reset_global_registry


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture(autouse=True)
def fresh_plugin_registry():
    """Give every test its own global plugin registry with the built-in plugins."""
    reset_global_registry()
    yield
    reset_global_registry()


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Create a project directory with a native source tree."""
    root = tmp_path / "takkernel"
    cpp = root / "src" / "main" / "cpp"
    cpp.mkdir(parents=True)
    (cpp / "CMakeLists.txt").write_text(
        "cmake_minimum_required(VERSION 3.20)\nproject(takkernel CXX)\n"
    )
    return root


@pytest.fixture
def project(project_dir: Path) -> Project:
    """Plain project without plugins."""
    return Project(project_dir)


@pytest.fixture
def android_project(project_dir: Path) -> Project:
    """Project with the Android library plugin applied and an NDK configured."""
    project = Project(project_dir, properties={"kernel.build.target": "android"})
    project.apply_plugin("com.android.library")
    android = project.extensions.get_by_name("android")
    android.ndk_directory = "C:\\Android\\sdk\\ndk\\25.1.8937393"
    android.default_config.ndk.abi_filters = ["arm64-v8a", "armeabi-v7a"]
    return project


@pytest.fixture
def mock_run_process():
    """Patch process execution of projects; yields the mock."""
    with patch("nativebuild.core.project.run_process") as mock_run:
        mock_run.return_value = 0
        yield mock_run


@pytest.fixture
def sample_config_yaml(project_dir: Path) -> Path:
    """Create a sample nativebuild.yaml for an Android kernel build."""
    config_content = """version: 1
project:
  name: takkernel
  build_dir: build
properties:
  kernel.build.target: android
android:
  ndk_directory: /opt/android/ndk
  abi_filters: [arm64-v8a, armeabi-v7a]
  library_variants: [debug, release]
external_native_build:
  cpp_flags: [-std=c++17]
  arguments: [-DENGINE_ENABLED=ON]
  build_target: install
  path: src/main/cpp/CMakeLists.txt
"""
    config_file = project_dir / "nativebuild.yaml"
    config_file.write_text(config_content)
    return config_file
