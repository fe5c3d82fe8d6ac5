"""
Multilib command.

Shows which multilib variant a set of driver options selects, or lists the
whole catalog.
"""

import logging

from ohoskit.cli.utils import strip_separator
from ohoskit.toolchain.args import ArgList
from ohoskit.toolchain.diagnostics import DiagnosticsEngine
from ohoskit.toolchain.flags import get_float_abi, normalize_flags
from ohoskit.toolchain.multilib import MultilibSet

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the multilib command.

    Args:
        args: Parsed arguments

    Returns:
        0 on success, 1 if an error diagnostic was reported
    """
    catalog = MultilibSet()

    if args.list:
        for variant in catalog:
            required = " ".join(f"+{p}" for p in variant.required) or "(always)"
            print(f"{variant.name or 'default':<24} {variant.suffix or '/':<24} {required}")
        return 0

    driver_args = ArgList(strip_separator(args.driver_args))
    diagnostics = DiagnosticsEngine()
    flags = normalize_flags(driver_args, get_float_abi(driver_args, diagnostics))
    selected = catalog.select(flags)

    print(selected.name or "default")
    return 1 if diagnostics.has_errors() else 0
