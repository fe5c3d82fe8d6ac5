"""
Resolve command.

Resolves the complete target configuration for a triple and a set of driver
options and prints it.
"""

import logging

from ohoskit.cli.utils import build_environment, build_probe, format_data, strip_separator
from ohoskit.core.filesystem import RecordingProbe
from ohoskit.toolchain.ohos import OHOSToolchain

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the resolve command.

    Args:
        args: Parsed arguments

    Returns:
        0 on success, 1 if an error diagnostic was reported
    """
    environment = build_environment(args)
    probe = build_probe(args)
    driver_args = strip_separator(args.driver_args)

    logger.debug(f"Resolving {args.target} with {driver_args}")
    toolchain = OHOSToolchain(args.target, driver_args, environment, probe)
    config = toolchain.resolve()

    data = config.to_dict()
    if isinstance(probe, RecordingProbe):
        data["probes"] = [
            f"{'hit ' if path in probe.hits else 'miss'} {path}"
            for path in probe.queries
        ]

    print(format_data(data, args.format))
    return 1 if config.has_errors() else 0
