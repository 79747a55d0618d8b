"""
sdkprune CLI argument parser.

This module implements the command-line interface for sdkprune using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from sdkprune import __version__
from sdkprune.core.exceptions import SdkPruneError

logger = logging.getLogger(__name__)


class CLI:
    """sdkprune command-line interface."""

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
            prog="sdkprune",
            description="sdkprune - keep one Go SDK per minor line, plus gotip",
            epilog='Use "sdkprune COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"sdkprune {__version__}"
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
            help="Path to configuration file (default: ~/.config/sdkprune.yaml)",
        )

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_sync_command(subparsers)
        self._add_plan_command(subparsers)

        return parser

    def _add_selection_options(self, parser):
        """Options shared by commands that compute the kept versions."""
        parser.add_argument(
            "--min-minor",
            type=int,
            metavar="N",
            help="Earliest minor version to keep (default: 11)",
        )
        parser.add_argument(
            "--releases-url",
            metavar="URL",
            help="Go download index URL",
        )
        parser.add_argument(
            "--releases-file",
            type=Path,
            metavar="PATH",
            help="Read releases from a saved download index instead of the network",
        )

    def _add_sync_command(self, subparsers):
        """Add 'sync' subcommand."""
        parser = subparsers.add_parser(
            "sync",
            help="Prune and reinstall Go SDKs",
            description=(
                "Remove SDKs and launchers that are not kept, reinstall the kept "
                "versions and link gotip as the default go"
            ),
        )
        self._add_selection_options(parser)
        parser.add_argument(
            "--bootstrap-go",
            type=Path,
            metavar="PATH",
            help="Path to go for installing versions (default: /usr/bin/go)",
        )
        parser.add_argument(
            "--parallel",
            type=int,
            metavar="N",
            help="Parallel downloads (default: 3)",
        )
        parser.add_argument(
            "--sdk-root",
            type=Path,
            metavar="DIR",
            help="Directory holding downloaded SDKs (default: ~/sdk)",
        )
        parser.add_argument(
            "--bin-dir",
            type=Path,
            metavar="DIR",
            help="Launcher directory (default: resolved with go env GOBIN/GOPATH)",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Show what would be removed and installed without changing anything",
        )

    def _add_plan_command(self, subparsers):
        """Add 'plan' subcommand."""
        parser = subparsers.add_parser(
            "plan",
            help="Print the versions that would be kept",
            description="Print the versions a sync would keep and install",
        )
        self._add_selection_options(parser)

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
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        self._configure_logging(parsed_args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130
        except SdkPruneError as e:
            logger.error(f"Error: {e}")
            return 1
        except Exception as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        command_map = {
            "sync": "sdkprune.cli.commands.sync",
            "plan": "sdkprune.cli.commands.plan",
        }

        module_name = command_map.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        module = importlib.import_module(module_name)
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
