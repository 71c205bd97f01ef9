"""
hurlkit CLI argument parser.

This module implements the command-line interface for hurlkit using argparse.
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

    __version__ = version("hurlkit")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)


class CLI:
    """hurlkit command-line interface."""

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
            prog="hurlkit",
            description="hurlkit - install the hurl HTTP testing tool",
            epilog='Use "hurlkit COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"hurlkit {__version__}"
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
            help="Path to configuration file (default: ./hurlkit.yaml)",
        )

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_install_command(subparsers)
        self._add_resolve_command(subparsers)
        self._add_locate_command(subparsers)
        self._add_cache_command(subparsers)

        return parser

    def _add_version_options(self, parser):
        parser.add_argument(
            "--hurl-version",
            metavar="VERSION",
            help='hurl version to use, e.g. "4.3.0", "v4.3.0" or "latest"',
        )
        parser.add_argument(
            "--github-token",
            metavar="TOKEN",
            help="Token for GitHub API requests (avoids rate limiting)",
        )

    def _add_install_command(self, subparsers):
        """Add 'install' subcommand."""
        parser = subparsers.add_parser(
            "install",
            help="Install hurl",
            description="Download (or restore from cache) and install hurl",
        )
        self._add_version_options(parser)
        parser.add_argument(
            "--no-cache",
            action="store_true",
            default=None,
            help="Do not restore from or save to the artifact cache",
        )
        parser.add_argument(
            "--install-root",
            type=Path,
            metavar="DIR",
            help="Directory receiving hurl-<version> (default: temp directory)",
        )
        parser.add_argument(
            "--cache-dir",
            type=Path,
            metavar="DIR",
            help="Artifact cache directory (default: ~/.hurlkit/cache)",
        )

    def _add_resolve_command(self, subparsers):
        """Add 'resolve' subcommand."""
        parser = subparsers.add_parser(
            "resolve",
            help="Print the concrete hurl version",
            description='Resolve a version specifier such as "latest"',
        )
        self._add_version_options(parser)

    def _add_locate_command(self, subparsers):
        """Add 'locate' subcommand."""
        parser = subparsers.add_parser(
            "locate",
            help="Print the download URL of a hurl distribution",
            description="Compute the download URL for a version and target",
        )
        parser.add_argument(
            "--hurl-version", metavar="VERSION", required=True, help="hurl version"
        )
        parser.add_argument(
            "--platform",
            metavar="OS",
            help="Target OS: linux, macos/darwin, windows/win32 (default: current)",
        )
        parser.add_argument(
            "--arch",
            metavar="ARCH",
            help="Target architecture: x64, arm64 (default: current)",
        )

    def _add_cache_command(self, subparsers):
        """Add 'cache' command with sub-commands."""
        parser = subparsers.add_parser(
            "cache",
            help="Manage the artifact cache",
            description="List or clear cached hurl installations",
        )
        parser.add_argument(
            "--cache-dir",
            type=Path,
            metavar="DIR",
            help="Artifact cache directory (default: ~/.hurlkit/cache)",
        )
        cache_subparsers = parser.add_subparsers(
            dest="cache_command", help="Cache commands", metavar="SUBCOMMAND"
        )
        cache_subparsers.add_parser("list", help="List cached entries")
        clear_parser = cache_subparsers.add_parser(
            "clear", help="Remove one or all cached entries"
        )
        clear_parser.add_argument(
            "key", nargs="?", help="Cache key to remove (default: all)"
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
            "install": "hurlkit.cli.commands.install",
            "resolve": "hurlkit.cli.commands.resolve",
            "locate": "hurlkit.cli.commands.locate",
            "cache": "hurlkit.cli.commands.cache",
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
