"""
Flag normalization.

Raw driver options are boiled down to the handful of boolean predicates
that multilib selection looks at: the CPU, the FPU and the float ABI.
"""

import logging
from enum import Enum
from typing import Iterable

from ohoskit.toolchain.args import ArgList
from ohoskit.toolchain.diagnostics import DiagnosticsEngine

logger = logging.getLogger(__name__)

MULTILIB_CPU = "cortex-a7"
MULTILIB_FPU = "neon-vfpv4"

SOFT_FLOAT_OPTIONS = ("-msoft-float", "--soft-float")
HARD_FLOAT_OPTIONS = ("-mhard-float", "--hard-float")
FLOAT_ABI_OPTION = "-mfloat-abi="


class FloatABI(Enum):
    """Floating-point calling convention."""

    SOFT = "soft"
    SOFTFP = "softfp"
    HARD = "hard"
    # -mfloat-abi= with an empty value; no float ABI predicate holds
    INVALID = "invalid"


_FLOAT_ABI_VALUES = (FloatABI.SOFT.value, FloatABI.SOFTFP.value, FloatABI.HARD.value)


class FlagSet(frozenset):
    """
    Immutable set of predicate names that hold for an invocation.

    Predicate names are spelled like the option they come from, without the
    leading dash: 'mcpu=cortex-a7', 'mfpu=neon-vfpv4', 'mfloat-abi=hard'.
    """

    def __new__(cls, predicates: Iterable[str] = ()):
        return super().__new__(cls, predicates)

    def __repr__(self) -> str:
        return f"FlagSet({sorted(self)!r})"


def get_float_abi(args: ArgList, diagnostics: DiagnosticsEngine) -> FloatABI:
    """
    Determine the float ABI from the driver options.

    Only the last of the soft-float, hard-float and -mfloat-abi= options is
    consulted. An unrecognized -mfloat-abi value is reported and treated as
    soft; an empty one is INVALID and not reported. With no relevant option
    the ABI is soft.

    Args:
        args: Driver options
        diagnostics: Engine receiving the invalid-value report

    Returns:
        Resolved FloatABI
    """
    arg = args.last_arg(*SOFT_FLOAT_OPTIONS, *HARD_FLOAT_OPTIONS, FLOAT_ABI_OPTION)
    if arg is None:
        return FloatABI.SOFT

    if arg.option in SOFT_FLOAT_OPTIONS:
        return FloatABI.SOFT
    if arg.option in HARD_FLOAT_OPTIONS:
        return FloatABI.HARD

    if not arg.value:
        return FloatABI.INVALID
    if arg.value in _FLOAT_ABI_VALUES:
        return FloatABI(arg.value)

    diagnostics.report("invalid-mfloat-abi", arg=arg.as_string())
    return FloatABI.SOFT


def normalize_flags(args: ArgList, float_abi: FloatABI) -> FlagSet:
    """
    Build the multilib predicate set.

    Args:
        args: Driver options
        float_abi: Float ABI resolved by get_float_abi()

    Returns:
        FlagSet containing every predicate that holds
    """
    predicates = set()

    if args.last_value("-mcpu=") == MULTILIB_CPU:
        predicates.add(f"mcpu={MULTILIB_CPU}")
    if args.last_value("-mfpu=") == MULTILIB_FPU:
        predicates.add(f"mfpu={MULTILIB_FPU}")
    if float_abi is not FloatABI.INVALID:
        predicates.add(f"mfloat-abi={float_abi.value}")

    flags = FlagSet(predicates)
    logger.debug(f"Multilib flags: {sorted(flags)}")
    return flags
