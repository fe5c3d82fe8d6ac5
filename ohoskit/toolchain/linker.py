"""
Dynamic linker naming and linker policy.

Bionic-style targets load binaries through the system linker under
/system/bin; musl targets use the musl loader, whose file name encodes the
architecture and, on ARM, the hard-float ABI.
"""

import logging
from typing import Tuple

from ohoskit.cross.triple import LibcFamily, TargetTriple
from ohoskit.toolchain.args import ArgList
from ohoskit.toolchain.flags import FloatABI

logger = logging.getLogger(__name__)

# family -> (32-bit loader, 64-bit loader); None means built from the arch
DYNAMIC_LINKERS = {
    LibcFamily.BIONIC: ("/system/bin/linker", "/system/bin/linker64"),
    LibcFamily.MUSL: None,
}

MUSL_ARCH_ALIASES = {
    "arm": "arm",
    "thumb": "arm",
    "armeb": "armeb",
    "thumbeb": "armeb",
}

PROFILE_RUNTIME_HOOK = "__llvm_profile_runtime"

# (positive, joined positive, negative) triplets
PROFILE_FLAGS = (
    ("-fprofile-arcs", None, "-fno-profile-arcs"),
    ("-fprofile-generate", "-fprofile-generate=", "-fno-profile-generate"),
    (
        "-fprofile-instr-generate",
        "-fprofile-instr-generate=",
        "-fno-profile-instr-generate",
    ),
    ("-fcs-profile-generate", "-fcs-profile-generate=", "-fno-profile-generate"),
)

# Options that request profiling on their own
PROFILE_REQUEST_OPTIONS = ("-fcreate-profile", "-forder-file-instrumentation")

COVERAGE_OPTIONS = ("--coverage", "-coverage")
TEST_COVERAGE_OPTION = "-ftest-coverage"


def get_dynamic_linker(triple: TargetTriple, float_abi: FloatABI) -> str:
    """
    Get the dynamic loader path for a target.

    Args:
        triple: Parsed target triple
        float_abi: Resolved float ABI

    Returns:
        Absolute loader path

    Example:
        >>> from ohoskit.cross.triple import parse_triple
        >>> get_dynamic_linker(parse_triple('arm-linux-ohosmusl'), FloatABI.HARD)
        '/lib/ld-musl-armhf.so.1'
    """
    fixed = DYNAMIC_LINKERS.get(triple.family)
    if fixed is not None:
        return fixed[1] if triple.is_64bit else fixed[0]

    arch_name = MUSL_ARCH_ALIASES.get(triple.arch, triple.arch_name)
    if triple.is_arm and float_abi is FloatABI.HARD:
        arch_name += "hf"

    return f"/lib/ld-musl-{arch_name}.so.1"


def get_linker_flags(enable_build_id: bool = False) -> Tuple[str, ...]:
    """
    Get the linker flags every OHOS link receives.

    Both hash-style options are passed, gnu first; the linker sees them in
    this order.

    Args:
        enable_build_id: Also pass --build-id

    Returns:
        Linker flag tokens in order
    """
    flags = [
        "-z",
        "now",
        "-z",
        "relro",
        "-z",
        "max-page-size=4096",
        "--hash-style=gnu",
        "--hash-style=both",
    ]
    if enable_build_id:
        flags.append("--build-id")
    flags.append("--enable-new-dtags")
    return tuple(flags)


def get_target_cc1_args(args: ArgList) -> Tuple[str, ...]:
    """Get target-specific compiler options (init arrays are on by default)."""
    if args.has_flag("-fuse-init-array", "-fno-use-init-array", True):
        return ("-fuse-init-array",)
    return ()


def needs_profile_rt(args: ArgList) -> bool:
    """
    Check whether the profiling runtime has to be linked.

    Coverage instrumentation (--coverage) counts as profiling.
    """
    if args.has_arg(*COVERAGE_OPTIONS):
        return True

    for positive, joined, negative in PROFILE_FLAGS:
        options = tuple(o for o in (positive, joined, negative) if o)
        arg = args.last_arg(*options)
        if arg is not None and arg.option != negative:
            return True

    return args.has_arg(*PROFILE_REQUEST_OPTIONS)


def get_profile_link_args(args: ArgList, profile_runtime: str) -> Tuple[str, ...]:
    """
    Get the link arguments pulling in the profiling runtime.

    The runtime hook symbol is force-referenced so the runtime's
    initialization is linked in, except for gcov-style coverage builds.

    Args:
        args: Driver options
        profile_runtime: Path of the static profiling runtime archive

    Returns:
        Link arguments, empty when profiling is not requested
    """
    if not needs_profile_rt(args):
        return ()

    link_args = []
    if not args.has_arg(*COVERAGE_OPTIONS) and not args.has_arg(TEST_COVERAGE_OPTION):
        link_args.append(f"-u{PROFILE_RUNTIME_HOOK}")
    link_args.append(profile_runtime)

    logger.debug(f"Profiling runtime link arguments: {link_args}")
    return tuple(link_args)
