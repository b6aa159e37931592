"""
Run command implementation.

Configures the project from its build description and runs the requested
tasks together with their dependencies.
"""

import logging

from nativebuild.cli.utils import load_project, print_error, print_warning
from nativebuild.core.exceptions import NativeBuildError
from nativebuild.core.tasks import TaskGraph

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the run command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    logger.debug(f"Arguments: {args}")
    task_names = list(args.tasks)

    try:
        project, facade = load_project(args, task_names)
        if facade is None:
            print_warning(
                "No external_native_build section in the build description; "
                "lifecycle tasks are not available"
            )

        if getattr(args, "dry_run", False):
            project.evaluate()
            for task in TaskGraph(project.tasks).plan(task_names):
                print(f":{task.name}")
            return 0

        executed = project.execute(task_names, lock_timeout=args.lock_timeout)
    except NativeBuildError as e:
        logger.error(f"Build failed: {e}")
        print_error("Build failed", str(e))
        return 1

    print(f"BUILD SUCCESSFUL ({len(executed)} tasks executed)")
    return 0
