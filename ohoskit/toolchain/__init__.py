"""
OHOS toolchain resolution for ohoskit.

This package turns a target triple, the raw driver options and the driver
environment into a ResolvedConfiguration: selected multilib, search paths,
runtime and C++ standard library directories, dynamic linker, linker policy
and supported sanitizers.
"""

from ohoskit.toolchain.args import Arg, ArgList
from ohoskit.toolchain.diagnostics import (
    Diagnostic,
    DiagnosticLevel,
    DiagnosticsEngine,
)
from ohoskit.toolchain.environment import DriverEnvironment
from ohoskit.toolchain.flags import FlagSet, FloatABI, get_float_abi, normalize_flags
from ohoskit.toolchain.multilib import (
    DEFAULT_MULTILIB,
    OHOS_MULTILIBS,
    MultilibSet,
    MultilibVariant,
)
from ohoskit.toolchain.runtime import ArtifactKind, compiler_rt_path
from ohoskit.toolchain.linker import get_dynamic_linker, get_linker_flags
from ohoskit.toolchain.sanitizers import (
    SanitizerKind,
    get_supported_sanitizers,
    sanitizer_names,
)
from ohoskit.toolchain.ohos import OHOSToolchain, ResolvedConfiguration, resolve_target

__all__ = [
    "Arg",
    "ArgList",
    "Diagnostic",
    "DiagnosticLevel",
    "DiagnosticsEngine",
    "DriverEnvironment",
    "FlagSet",
    "FloatABI",
    "get_float_abi",
    "normalize_flags",
    "DEFAULT_MULTILIB",
    "OHOS_MULTILIBS",
    "MultilibSet",
    "MultilibVariant",
    "ArtifactKind",
    "compiler_rt_path",
    "get_dynamic_linker",
    "get_linker_flags",
    "SanitizerKind",
    "get_supported_sanitizers",
    "sanitizer_names",
    "OHOSToolchain",
    "ResolvedConfiguration",
    "resolve_target",
]
