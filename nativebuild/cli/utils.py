"""
Shared utilities for CLI commands.

Provides common functionality used across CLI commands: locating and loading
the build description and reporting errors consistently.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, Tuple

from nativebuild.backends.base import NativeBuildFacade
from nativebuild.config import (
    DEFAULT_CONFIG_FILE,
    configure_external_native_build,
    create_project,
    parse_config,
    parse_property_overrides,
)
from nativebuild.core.project import Project

logger = logging.getLogger(__name__)


# ============================================================================
# Output
# ============================================================================


def print_error(message: str, details: Optional[str] = None):
    """
    Print error message to stderr in consistent format.

    Args:
        message: Main error message
        details: Optional additional details
    """
    print(f"ERROR: {message}", file=sys.stderr)
    if details:
        print(f"  {details}", file=sys.stderr)


def print_warning(message: str):
    """Print warning message to stderr."""
    print(f"WARNING: {message}", file=sys.stderr)


# ============================================================================
# Project Setup
# ============================================================================


def resolve_project_root(path: Optional[Path] = None) -> Path:
    """
    Resolve project root directory.

    Args:
        path: Optional path (defaults to current directory)

    Returns:
        Resolved absolute path
    """
    if path is None:
        path = Path.cwd()
    return path.resolve()


def resolve_config_file(args, project_root: Path) -> Path:
    """Return the build description given by --config or the default location."""
    if getattr(args, "config", None):
        return Path(args.config).resolve()
    return project_root / DEFAULT_CONFIG_FILE


def load_project(
    args, task_names: Sequence[str]
) -> Tuple[Project, Optional[NativeBuildFacade]]:
    """
    Load the build description and configure a project from it.

    Args:
        args: Parsed arguments (config, project_root, properties)
        task_names: Task names the build is started with

    Returns:
        Tuple of (project, external native build facade or None)

    Raises:
        NativeBuildError: If the build description or configuration is invalid
    """
    project_root = resolve_project_root(getattr(args, "project_root", None))
    config_file = resolve_config_file(args, project_root)
    logger.debug(f"Loading build description from {config_file}")

    config = parse_config(config_file)
    overrides = parse_property_overrides(getattr(args, "properties", None))
    project = create_project(config, project_root, task_names, overrides)
    facade = configure_external_native_build(project, config)
    return project, facade
