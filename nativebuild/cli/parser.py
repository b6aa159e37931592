"""
nbuild command-line interface.

Configures a project from nativebuild.yaml and runs or lists its tasks.
Each subcommand lives in ``nativebuild.cli.commands.<name>`` and exposes
``run(args) -> int``.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Get version from package
try:
    from importlib.metadata import version

    __version__ = version("nativebuild")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)

COMMAND_MODULES = {
    "run": "nativebuild.cli.commands.run",
    "tasks": "nativebuild.cli.commands.tasks",
}

# task progress ("> Task :name") is printed as bare lines at the default level
LOG_FORMATS = {
    logging.DEBUG: "%(levelname)s [%(name)s] %(message)s",
    logging.INFO: "%(message)s",
    logging.ERROR: "%(levelname)s: %(message)s",
}


class CLI:
    """nativebuild command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="nbuild",
            description="nativebuild - external native build driver",
            epilog='Use "nbuild COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"nativebuild {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to build description (default: ./nativebuild.yaml)",
        )
        parser.add_argument(
            "--project-root",
            type=Path,
            metavar="PATH",
            default=Path.cwd(),
            help="Project root directory (default: current directory)",
        )
        parser.add_argument(
            "-P",
            "--property",
            dest="properties",
            action="append",
            metavar="KEY=VALUE",
            help="Set a project property (can be used multiple times)",
        )

        # Subcommands
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_run_command(subparsers)
        self._add_tasks_command(subparsers)

        return parser

    def _add_run_command(self, subparsers):
        """Add 'run' subcommand."""
        parser = subparsers.add_parser(
            "run",
            help="Run tasks",
            description="Configure the project and run the given tasks",
        )
        parser.add_argument(
            "tasks",
            nargs="+",
            metavar="TASK",
            help="Tasks to run (e.g., postExternalNativeBuild, clean)",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Print the execution plan without running any task",
        )
        parser.add_argument(
            "--lock-timeout",
            type=float,
            default=60,
            metavar="SECONDS",
            help="Seconds to wait for another build of the project [default: 60]",
        )

    def _add_tasks_command(self, subparsers):
        """Add 'tasks' subcommand."""
        parser = subparsers.add_parser(
            "tasks",
            help="List tasks",
            description="Configure the project and list its tasks and dependencies",
        )
        parser.add_argument(
            "requested",
            nargs="*",
            metavar="TASK",
            help="Task names the build would start with (selects the variant)",
        )

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Parse arguments and run the selected subcommand.

        Returns:
            Exit code: the subcommand's, 1 when no subcommand is given or it
            fails unexpectedly, 130 when interrupted
        """
        parsed_args = self.parse_args(args)
        self._configure_logging(parsed_args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Build cancelled by user")
            return 130
        except Exception as e:
            logger.error(f"nbuild {parsed_args.command} failed: {e}")
            if parsed_args.verbose:
                logger.debug("Traceback:", exc_info=True)
            return 1

    def _configure_logging(self, args):
        """Set the log level and format of the nativebuild loggers."""
        if args.verbose:
            level = logging.DEBUG
        elif args.quiet:
            level = logging.ERROR
        else:
            level = logging.INFO

        logging.basicConfig(level=level, format=LOG_FORMATS[level], force=True)
        logging.getLogger("nativebuild").setLevel(level)

    def _dispatch_command(self, args) -> int:
        """Import the subcommand module and run it."""
        module_name = COMMAND_MODULES.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        logger.debug(f"Running nbuild {args.command} ({module_name})")
        return importlib.import_module(module_name).run(args)


def main():
    """Entry point of the ``nbuild`` console script."""
    sys.exit(CLI().run())


if __name__ == "__main__":
    main()
