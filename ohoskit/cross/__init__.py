"""
Cross-compilation target support for ohoskit.

This module parses target triples, maps them to multiarch directory names
and resolves the sysroot search layout of OHOS and LiteOS targets.
"""

from ohoskit.cross.triple import LibcFamily, TargetTriple, parse_triple
from ohoskit.cross.multiarch import get_multiarch_triple
from ohoskit.cross.sysroot import SysrootLayout, compute_sysroot

__all__ = [
    "LibcFamily",
    "TargetTriple",
    "parse_triple",
    "get_multiarch_triple",
    "SysrootLayout",
    "compute_sysroot",
]
