"""
Tasks command implementation.

Lists every task of the configured project with its dependencies.
"""

import logging

from nativebuild.cli.utils import load_project, print_error
from nativebuild.core.exceptions import NativeBuildError

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the tasks command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    logger.debug(f"Arguments: {args}")
    requested = list(getattr(args, "requested", None) or [])

    try:
        project, _ = load_project(args, requested)
        project.evaluate()
    except NativeBuildError as e:
        logger.error(f"Failed to configure project: {e}")
        print_error("Failed to configure project", str(e))
        return 1

    print(f"Tasks of project '{project.name}'")
    print("-" * 40)
    for name in project.tasks.names():
        task = project.tasks.get_by_name(name)
        line = name
        if task.description:
            line += f" - {task.description}"
        print(line)
        if task.dependencies:
            print(f"    depends on: {', '.join(task.dependencies)}")
    return 0
