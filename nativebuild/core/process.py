"""
External process execution.
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional, Sequence

from nativebuild.core.exceptions import ProcessExecutionError

logger = logging.getLogger(__name__)


def run_process(command_line: Sequence[str], working_dir: Optional[Path] = None) -> int:
    """
    Run a command synchronously and fail on non-zero exit.

    Args:
        command_line: Executable followed by its arguments
        working_dir: Working directory (default: current directory)

    Returns:
        Process exit code (always 0)

    Raises:
        ProcessExecutionError: If the executable is missing or exits non-zero
    """
    command_line = [str(part) for part in command_line]
    logger.info(f"Running: {' '.join(command_line)}")
    if working_dir is not None:
        logger.debug(f"Working directory: {working_dir}")

    try:
        result = subprocess.run(command_line, cwd=working_dir)
    except FileNotFoundError as e:
        logger.error(f"{command_line[0]} not found")
        raise ProcessExecutionError(
            command_line,
            working_dir,
            message=f"A problem occurred starting process '{command_line[0]}': {e}",
        ) from e

    if result.returncode != 0:
        logger.error(f"{command_line[0]} failed with exit code {result.returncode}")
        raise ProcessExecutionError(command_line, working_dir, result.returncode)
    return result.returncode
