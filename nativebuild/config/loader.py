"""
Turns a parsed build description into a configured Project.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Sequence

from nativebuild.backends import create_external_native_build, kernel_build_target
from nativebuild.backends.base import NativeBuildFacade
from nativebuild.config.parser import NativeBuildConfig
from nativebuild.core.project import Project
from nativebuild.plugins.android import AndroidLibraryPlugin, LibraryVariant

logger = logging.getLogger(__name__)


def create_project(
    config: NativeBuildConfig,
    project_root: Path,
    task_names: Optional[Sequence[str]] = None,
    property_overrides: Optional[Dict[str, str]] = None,
) -> Project:
    """
    Create a project from a build description.

    Properties from the command line override those of the build description.
    For Android builds the Android library plugin is applied and configured
    here, before any external native build call reads it.
    """
    properties = dict(config.properties)
    properties.update(property_overrides or {})

    project = Project(
        project_root,
        name=config.project.name,
        build_dir=config.project.build_dir,
        properties=properties,
        start_task_names=task_names,
    )

    if config.android is not None or kernel_build_target(project) == "android":
        project.apply_plugin(AndroidLibraryPlugin.plugin_id)
        if config.android is not None:
            android = project.extensions.get_by_name("android")
            android.ndk_directory = config.android.ndk_directory
            android.default_config.ndk.abi_filters = list(config.android.abi_filters)
            android.library_variants = [
                LibraryVariant(name) for name in config.android.library_variants
            ]

    return project


def configure_external_native_build(
    project: Project, config: NativeBuildConfig
) -> Optional[NativeBuildFacade]:
    """
    Create the externalNativeBuild extension and replay the configured calls.

    Calls are made in a fixed order with the source path last, so the
    lifecycle tasks are registered once every other input is known.

    Returns:
        The facade, or None when the build description has no
        external_native_build section

    Raises:
        UnsupportedBuildTargetError: If the kernel build target has no backend
    """
    native = config.external_native_build
    if native is None:
        logger.debug("No external_native_build section, skipping facade setup")
        return None

    facade = create_external_native_build(project)
    if native.c_flags is not None:
        facade.set_c_flags(*native.c_flags)
    if native.cpp_flags is not None:
        facade.set_cpp_flags(*native.cpp_flags)
    if native.arguments is not None:
        facade.set_arguments(*native.arguments)
    if native.build_target is not None:
        facade.set_build_target(native.build_target)
    if native.working_folder is not None:
        facade.set_working_folder(native.working_folder)
    if native.install_prefix is not None:
        facade.set_install_prefix(native.install_prefix)
    if native.path is not None:
        facade.set_path(native.path)
    return facade
