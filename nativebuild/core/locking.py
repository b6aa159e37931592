"""
Concurrent access control for nativebuild.

Two builds of the same project write into the same native intermediate
folders (``.cxx/`` and the CMake working folder). This module provides a
file-based build lock so that task execution for a project is serialized
across processes.

Usage:
    from nativebuild.core.locking import build_lock

    with build_lock(project.project_dir, timeout=60):
        project.execute(["postExternalNativeBuild"])
"""

import logging
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock, Timeout as LockTimeout

from nativebuild.core.exceptions import BuildLockTimeout

logger = logging.getLogger(__name__)

LOCK_DIR_NAME = ".nativebuild"


def get_lock_path(project_dir: Path) -> Path:
    """Return the build lock file location for a project."""
    return Path(project_dir) / LOCK_DIR_NAME / "build.lock"


@contextmanager
def build_lock(project_dir: Path, timeout: float = 60):
    """
    Acquire the build lock of a project.

    Args:
        project_dir: Project root directory
        timeout: Maximum wait time in seconds (default: 60)

    Yields:
        None

    Raises:
        BuildLockTimeout: If lock can't be acquired within timeout
    """
    lock_path = get_lock_path(project_dir)
    lock_path.parent.mkdir(parents=True, exist_ok=True)

    lock = FileLock(lock_path, timeout=timeout)

    try:
        with lock:
            logger.debug(f"Acquired build lock: {lock_path}")
            yield
            logger.debug(f"Released build lock: {lock_path}")
    except LockTimeout as e:
        logger.error(
            f"Could not acquire build lock after {timeout}s. "
            "Another build of this project may be running."
        )
        raise BuildLockTimeout(
            f"Could not acquire build lock after {timeout}s. "
            "Another build of this project may be running."
        ) from e
