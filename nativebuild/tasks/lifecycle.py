"""
Lifecycle tasks around the external native build.

Three placeholder tasks give other build steps stable anchors regardless of
which plugin performs the native build:

- ``preExternalNativeBuild`` runs before the native build starts
- ``postExternalNativeBuild`` runs immediately after the native build completes
- ``externalNativeBuildClean`` runs the clean tasks of the native build
"""

import logging
from typing import Any, List, Optional

from nativebuild.core.project import CLEAN_TASK_NAME
from nativebuild.tasks.dependencies import TaskDependencySpec

logger = logging.getLogger(__name__)

PRE_BUILD_TASK_NAME = "preExternalNativeBuild"
POST_BUILD_TASK_NAME = "postExternalNativeBuild"
CLEAN_HOOK_TASK_NAME = "externalNativeBuildClean"

LIFECYCLE_TASK_NAMES = (
    PRE_BUILD_TASK_NAME,
    POST_BUILD_TASK_NAME,
    CLEAN_HOOK_TASK_NAME,
)


class LifecycleTaskRegistrar:
    """
    Registers the lifecycle tasks of a project and wires their edges.

    Registration happens immediately; wiring is queued on the project's
    ``after_evaluate`` hooks because backend task names may depend on the
    full configuration (e.g. which variant the requested tasks build).
    """

    def __init__(self, project: Any, dependencies: TaskDependencySpec):
        self.project = project
        self.dependencies = dependencies
        self.registered = False
        self.wired = False
        self.resolved_pre_depends: Optional[List[str]] = None
        self.resolved_post_depends: Optional[List[str]] = None
        self.resolved_clean_depends: Optional[List[str]] = None

    def register(self) -> None:
        """Register the three lifecycle tasks and queue the wiring. Runs once."""
        if self.registered:
            return
        tasks = self.project.tasks
        tasks.register(
            PRE_BUILD_TASK_NAME, description="Runs before the external native build."
        )
        tasks.register(
            POST_BUILD_TASK_NAME, description="Runs after the external native build."
        )
        tasks.register(
            CLEAN_HOOK_TASK_NAME, description="Cleans the external native build."
        )
        self.registered = True
        self.project.after_evaluate(self.wire)

    def wire(self, project: Any = None) -> None:
        """
        Add the dependency edges described by the TaskDependencySpec.

        Providers are resolved here, once. The resolved names are kept in
        the ``resolved_*`` attributes.

        Raises:
            UnknownTaskError: If a named backend task does not exist
        """
        if self.wired:
            return
        tasks = self.project.tasks

        pre_depends = self.dependencies.resolve_pre_depends()
        if pre_depends is not None:
            for name in pre_depends:
                tasks.get_by_name(name).depends_on(PRE_BUILD_TASK_NAME)

        post_depends = self.dependencies.resolve_post_depends()
        if post_depends is not None:
            for name in post_depends:
                tasks.get_by_name(POST_BUILD_TASK_NAME).depends_on(name)

        clean_depends = self.dependencies.resolve_clean_depends()
        if clean_depends is not None:
            for name in clean_depends:
                tasks.get_by_name(CLEAN_HOOK_TASK_NAME).depends_on(name)

        tasks.get_by_name(CLEAN_TASK_NAME).depends_on(CLEAN_HOOK_TASK_NAME)
        self.resolved_pre_depends = pre_depends
        self.resolved_post_depends = post_depends
        self.resolved_clean_depends = clean_depends
        self.wired = True
        logger.debug(
            f"Wired lifecycle tasks: pre={pre_depends} post={post_depends} "
            f"clean={clean_depends}"
        )
