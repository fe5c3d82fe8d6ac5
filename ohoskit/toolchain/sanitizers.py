"""
Sanitizer capability table.

Sanitizers are modelled as an ``enum.Flag`` so that a target's supported
set is a single bitmask that can be combined and tested with ``|`` / ``&``.
"""

from enum import Flag, auto
from typing import List, Optional

from ohoskit.cross.triple import TargetTriple


class SanitizerKind(Flag):
    """Runtime instrumentation and sanitization features."""

    ADDRESS = auto()
    POINTER_COMPARE = auto()
    POINTER_SUBTRACT = auto()
    HWADDRESS = auto()
    KERNEL_ADDRESS = auto()
    MEMORY = auto()
    THREAD = auto()
    LEAK = auto()
    FUZZER = auto()
    FUZZER_NO_LINK = auto()
    SAFE_STACK = auto()
    SHADOW_CALL_STACK = auto()
    SCUDO = auto()
    MEMTAG = auto()
    DATAFLOW = auto()

    # undefined behaviour checks
    ALIGNMENT = auto()
    ARRAY_BOUNDS = auto()
    BOOL = auto()
    BUILTIN = auto()
    ENUM = auto()
    FLOAT_CAST_OVERFLOW = auto()
    FUNCTION = auto()
    INTEGER_DIVIDE_BY_ZERO = auto()
    NONNULL_ATTRIBUTE = auto()
    NULL = auto()
    OBJECT_SIZE = auto()
    POINTER_OVERFLOW = auto()
    RETURN = auto()
    RETURNS_NONNULL_ATTRIBUTE = auto()
    SHIFT_BASE = auto()
    SHIFT_EXPONENT = auto()
    SIGNED_INTEGER_OVERFLOW = auto()
    UNREACHABLE = auto()
    VLA_BOUND = auto()
    VPTR = auto()

    # control flow integrity
    CFI_CAST_STRICT = auto()
    CFI_DERIVED_CAST = auto()
    CFI_ICALL = auto()
    CFI_MFCALL = auto()
    CFI_UNRELATED_CAST = auto()
    CFI_NVCALL = auto()
    CFI_VCALL = auto()

    # checks outside the undefined group
    FLOAT_DIVIDE_BY_ZERO = auto()
    UNSIGNED_INTEGER_OVERFLOW = auto()
    IMPLICIT_UNSIGNED_INTEGER_TRUNCATION = auto()
    IMPLICIT_SIGNED_INTEGER_TRUNCATION = auto()
    IMPLICIT_INTEGER_SIGN_CHANGE = auto()
    NULLABILITY_ARG = auto()
    NULLABILITY_ASSIGN = auto()
    NULLABILITY_RETURN = auto()
    LOCAL_BOUNDS = auto()

    # groups
    SHIFT = SHIFT_BASE | SHIFT_EXPONENT
    UNDEFINED = (
        ALIGNMENT
        | ARRAY_BOUNDS
        | BOOL
        | BUILTIN
        | ENUM
        | FLOAT_CAST_OVERFLOW
        | FUNCTION
        | INTEGER_DIVIDE_BY_ZERO
        | NONNULL_ATTRIBUTE
        | NULL
        | OBJECT_SIZE
        | POINTER_OVERFLOW
        | RETURN
        | RETURNS_NONNULL_ATTRIBUTE
        | SHIFT_BASE
        | SHIFT_EXPONENT
        | SIGNED_INTEGER_OVERFLOW
        | UNREACHABLE
        | VLA_BOUND
        | VPTR
    )
    CFI = (
        CFI_DERIVED_CAST
        | CFI_ICALL
        | CFI_MFCALL
        | CFI_UNRELATED_CAST
        | CFI_NVCALL
        | CFI_VCALL
    )
    IMPLICIT_CONVERSION = (
        IMPLICIT_UNSIGNED_INTEGER_TRUNCATION
        | IMPLICIT_SIGNED_INTEGER_TRUNCATION
        | IMPLICIT_INTEGER_SIGN_CHANGE
    )
    NULLABILITY = NULLABILITY_ARG | NULLABILITY_ASSIGN | NULLABILITY_RETURN


# Sanitizers OHOS supports on top of the generic set.
OHOS_SANITIZERS = (
    SanitizerKind.ADDRESS
    | SanitizerKind.POINTER_COMPARE
    | SanitizerKind.POINTER_SUBTRACT
    | SanitizerKind.FUZZER
    | SanitizerKind.FUZZER_NO_LINK
    | SanitizerKind.MEMORY
    | SanitizerKind.VPTR
    | SanitizerKind.SAFE_STACK
    | SanitizerKind.SCUDO
)

CFI_ICALL_ARCHES = ("x86", "x86_64", "arm", "aarch64", "aarch64_be")
SHADOW_CALL_STACK_ARCHES = ("x86_64", "aarch64", "aarch64_be")
MEMTAG_ARCHES = ("aarch64", "aarch64_be")

_SINGLE_KINDS = [
    kind
    for kind in SanitizerKind.__members__.values()
    if kind.value and kind.value & (kind.value - 1) == 0
]


def generic_sanitizers(triple: Optional[TargetTriple] = None) -> SanitizerKind:
    """
    Get the sanitizers any target supports.

    Args:
        triple: Target; adds the architecture-dependent checks when given

    Returns:
        SanitizerKind mask
    """
    mask = (
        (SanitizerKind.UNDEFINED & ~SanitizerKind.VPTR & ~SanitizerKind.FUNCTION)
        | (SanitizerKind.CFI & ~SanitizerKind.CFI_ICALL)
        | SanitizerKind.CFI_CAST_STRICT
        | SanitizerKind.FLOAT_DIVIDE_BY_ZERO
        | SanitizerKind.UNSIGNED_INTEGER_OVERFLOW
        | SanitizerKind.IMPLICIT_CONVERSION
        | SanitizerKind.NULLABILITY
        | SanitizerKind.LOCAL_BOUNDS
    )
    if triple is None:
        return mask

    if triple.arch in CFI_ICALL_ARCHES:
        mask |= SanitizerKind.CFI_ICALL
    if triple.arch in SHADOW_CALL_STACK_ARCHES:
        mask |= SanitizerKind.SHADOW_CALL_STACK
    if triple.arch in MEMTAG_ARCHES:
        mask |= SanitizerKind.MEMTAG
    return mask


def get_supported_sanitizers(triple: TargetTriple) -> SanitizerKind:
    """Get the sanitizers an OHOS target supports."""
    return generic_sanitizers(triple) | OHOS_SANITIZERS


def sanitizer_name(kind: SanitizerKind) -> str:
    """Get the command-line spelling of a single sanitizer ('pointer-compare')."""
    return kind.name.lower().replace("_", "-")


def sanitizer_names(mask: SanitizerKind) -> List[str]:
    """
    Render a mask as sorted command-line sanitizer names.

    Example:
        >>> sanitizer_names(SanitizerKind.ADDRESS | SanitizerKind.SCUDO)
        ['address', 'scudo']
    """
    return sorted(sanitizer_name(kind) for kind in _SINGLE_KINDS if kind & mask)
