"""
Compiler-rt command.

Prints the path of one compiler runtime artifact for a target.
"""

from ohoskit.cli.utils import build_environment, strip_separator
from ohoskit.core.filesystem import VirtualFileSystem
from ohoskit.toolchain.ohos import OHOSToolchain
from ohoskit.toolchain.runtime import ArtifactKind


def run(args) -> int:
    """
    Run the compiler-rt command.

    Args:
        args: Parsed arguments

    Returns:
        Exit code (0 for success)
    """
    environment = build_environment(args)
    # Artifact names do not depend on the filesystem.
    toolchain = OHOSToolchain(
        args.target,
        strip_separator(args.driver_args),
        environment,
        probe=VirtualFileSystem(),
    )

    print(toolchain.compiler_rt(args.component, ArtifactKind.from_name(args.kind)))
    return 0
