"""
Multiarch triple mapping.

The sysroot and the compiler resource directory lay out per-target
directories under a canonical multiarch name that does not always match the
triple the user typed (``armv7a-unknown-linux-ohosmusl`` lives under
``arm-linux-ohosmusl``).
"""

import logging

from ohoskit.cross.triple import TargetTriple

logger = logging.getLogger(__name__)

# arch -> (liteOS name, OHOS name, takes the musl postfix)
MULTIARCH_TABLE = {
    "arm": ("arm-liteos", "arm-linux-ohos", True),
    "thumb": ("arm-liteos", "arm-linux-ohos", True),
    "riscv32": ("riscv32-liteos", "riscv32-linux-ohos", False),
    "x86": (None, "i686-linux-ohos", False),
    "x86_64": (None, "x86_64-linux-ohos", False),
    "aarch64": (None, "aarch64-linux-ohos", True),
}


def get_multiarch_triple(triple: TargetTriple) -> str:
    """
    Get the canonical multiarch directory name for a target.

    Args:
        triple: Parsed target triple

    Returns:
        Multiarch name; the triple text unchanged for unmapped architectures

    Example:
        >>> from ohoskit.cross.triple import parse_triple
        >>> get_multiarch_triple(parse_triple('aarch64-linux-ohosmusl'))
        'aarch64-linux-ohosmusl'
        >>> get_multiarch_triple(parse_triple('armv7a-liteos'))
        'arm-liteos'
    """
    entry = MULTIARCH_TABLE.get(triple.arch)
    if entry is None:
        logger.debug(f"No multiarch mapping for '{triple.arch}', using '{triple.text}'")
        return triple.text

    liteos_name, ohos_name, takes_musl_postfix = entry

    if triple.is_liteos and liteos_name:
        return liteos_name

    if takes_musl_postfix and triple.is_musl:
        return ohos_name + "musl"
    return ohos_name
