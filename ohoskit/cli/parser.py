"""
ohoskit CLI argument parser.

This module implements the command-line interface for ohoskit using argparse.
Driver options to resolve against are passed after '--'.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

try:
    from importlib.metadata import version

    __version__ = version("ohoskit")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)

# command name -> module exposing run(args)
COMMAND_MODULES = {
    "resolve": "ohoskit.cli.commands.resolve",
    "multilib": "ohoskit.cli.commands.multilib",
    "compiler-rt": "ohoskit.cli.commands.compiler_rt",
}


class CLI:
    """ohoskit command-line interface."""

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
            prog="ohoskit",
            description="ohoskit - OHOS target configuration resolver",
            epilog='Use "ohoskit COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        parser.add_argument(
            "--version", action="version", version=f"ohoskit {__version__}"
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

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_resolve_command(subparsers)
        self._add_multilib_command(subparsers)
        self._add_compiler_rt_command(subparsers)

        return parser

    def _add_environment_options(self, parser):
        """Add the driver environment options shared by several commands."""
        parser.add_argument(
            "--target",
            required=True,
            metavar="TRIPLE",
            help="Target triple (e.g., aarch64-linux-ohos, arm-linux-ohosmusl)",
        )
        parser.add_argument(
            "--resource-dir",
            metavar="DIR",
            help="Compiler resource directory (lib/clang/<version>)",
        )
        parser.add_argument(
            "--env-file",
            type=Path,
            metavar="PATH",
            help="YAML file with driver environment values",
        )
        parser.add_argument(
            "driver_args",
            nargs="*",
            metavar="DRIVER_ARG",
            help="Driver options to resolve against, after '--'",
        )

    def _add_resolve_command(self, subparsers):
        """Add 'resolve' subcommand."""
        parser = subparsers.add_parser(
            "resolve",
            help="Resolve the full target configuration",
            description="Resolve multilib, search paths, runtime, loader and link policy",
        )
        self._add_environment_options(parser)
        parser.add_argument(
            "--sysroot",
            metavar="DIR",
            help="Sysroot override (default: <installed-dir>/../../sysroot if present)",
        )
        parser.add_argument(
            "--installed-dir",
            metavar="DIR",
            help="Directory the compiler binary is installed in",
        )
        parser.add_argument(
            "--driver-dir",
            metavar="DIR",
            help="Directory of the driver executable",
        )
        parser.add_argument(
            "--c-include-dir",
            action="append",
            metavar="DIR",
            help="Configure-time C include directory (can be used multiple times)",
        )
        parser.add_argument(
            "--cxx", action="store_true", help="Resolve as the C++ driver"
        )
        parser.add_argument(
            "--build-id",
            action="store_true",
            help="Pass --build-id to the linker",
        )
        parser.add_argument(
            "--vfs",
            type=Path,
            metavar="PATH",
            help="YAML listing of existing paths to use instead of the real filesystem",
        )
        parser.add_argument(
            "--trace-probes",
            action="store_true",
            help="Print every filesystem probe",
        )
        parser.add_argument(
            "--format",
            choices=["text", "json", "yaml"],
            default="text",
            metavar="FORMAT",
            help="Output format (text|json|yaml) [default: text]",
        )

    def _add_multilib_command(self, subparsers):
        """Add 'multilib' subcommand."""
        parser = subparsers.add_parser(
            "multilib",
            help="Show the selected multilib",
            description="Show the multilib selected for the given driver options",
        )
        parser.add_argument(
            "--list", action="store_true", help="List the whole multilib catalog"
        )
        parser.add_argument(
            "driver_args",
            nargs="*",
            metavar="DRIVER_ARG",
            help="Driver options to select against, after '--'",
        )

    def _add_compiler_rt_command(self, subparsers):
        """Add 'compiler-rt' subcommand."""
        parser = subparsers.add_parser(
            "compiler-rt",
            help="Print the path of a compiler runtime artifact",
            description="Print the path of a compiler-rt artifact for the target",
        )
        parser.add_argument(
            "component", metavar="COMPONENT", help="Runtime component (e.g., builtins)"
        )
        parser.add_argument(
            "--kind",
            choices=["object", "static", "shared"],
            default="static",
            metavar="KIND",
            help="Artifact kind (object|static|shared) [default: static]",
        )
        self._add_environment_options(parser)

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
        """Set up the root logger for the verbosity chosen on the command line."""
        if args.verbose:
            level, format_str = logging.DEBUG, "%(levelname)s [%(name)s] %(message)s"
        else:
            level = logging.ERROR if args.quiet else logging.WARNING
            format_str = "%(levelname)s: %(message)s"

        logging.basicConfig(level=level, format=format_str, force=True)

    def _dispatch_command(self, args) -> int:
        """Import the command module for args.command and run it."""
        module_name = COMMAND_MODULES.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        return importlib.import_module(module_name).run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
