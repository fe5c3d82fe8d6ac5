"""
Compiler runtime and C++ standard library resolution.

Both the compiler runtime (compiler-rt) and libc++ are looked up in three
places, each with the multilib suffix appended: under the target exactly as
given on the command line, under the normalized triple, and under the
multiarch triple. The first existing directory wins.
"""

import logging
from enum import Enum
from typing import Optional, Sequence, Tuple

from ohoskit.core.filesystem import Probe, join_path
from ohoskit.toolchain.args import ArgList
from ohoskit.toolchain.diagnostics import DiagnosticsEngine

logger = logging.getLogger(__name__)

SUPPORTED_RUNTIME_LIB = "compiler-rt"
SUPPORTED_CXX_STDLIB = "libc++"

CXX_STDLIB_LINK_ARGS = ("-lc++", "-lc++abi", "-lunwind")


class ArtifactKind(Enum):
    """Kind of compiler runtime artifact, with its (prefix, extension)."""

    OBJECT = ("", ".o")
    STATIC = ("lib", ".a")
    SHARED = ("lib", ".so")

    @property
    def prefix(self) -> str:
        return self.value[0]

    @property
    def extension(self) -> str:
        return self.value[1]

    @classmethod
    def from_name(cls, name: str) -> "ArtifactKind":
        """Look up a kind by its lowercase name ('object', 'static', 'shared')."""
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(
                f"Unknown artifact kind: {name}. "
                f"Supported kinds: {', '.join(k.name.lower() for k in cls)}"
            )


def first_existing(candidates: Sequence[str], probe: Probe) -> Optional[str]:
    """
    Get the first candidate that exists.

    Candidates after the first hit are never probed.
    """
    for candidate in candidates:
        if probe(candidate):
            logger.debug(f"Found {candidate}")
            return candidate
    return None


def runtime_path_candidates(
    resource_dir: str, target_names: Sequence[str], suffix: str
) -> Tuple[str, ...]:
    return tuple(join_path(resource_dir, "lib", name, suffix) for name in target_names)


def cxx_stdlib_path_candidates(
    driver_dir: str, target_names: Sequence[str], suffix: str
) -> Tuple[str, ...]:
    return tuple(
        join_path(driver_dir, "../lib", name, "c++", suffix) for name in target_names
    )


def get_runtime_lib_type(args: ArgList, diagnostics: DiagnosticsEngine) -> str:
    """
    Get the runtime library to link.

    compiler-rt is the only runtime; asking for another one is reported and
    compiler-rt is used anyway.
    """
    arg = args.last_arg("--rtlib=", "-rtlib=")
    if arg is not None and arg.value != SUPPORTED_RUNTIME_LIB:
        diagnostics.report("invalid-rtlib-name", arg=arg.as_string())
    return SUPPORTED_RUNTIME_LIB


def get_cxx_stdlib_type(args: ArgList, diagnostics: DiagnosticsEngine) -> str:
    """
    Get the C++ standard library to use.

    libc++ is the only C++ standard library; asking for another one is
    reported and libc++ is used anyway.
    """
    arg = args.last_arg("--stdlib=", "-stdlib=")
    if arg is not None and arg.value != SUPPORTED_CXX_STDLIB:
        diagnostics.report("invalid-stdlib-name", arg=arg.as_string())
    return SUPPORTED_CXX_STDLIB


def compiler_rt_path(
    resource_dir: str, target: str, suffix: str, component: str, kind: ArtifactKind
) -> str:
    """
    Get the path of a compiler-rt artifact.

    Args:
        resource_dir: Compiler resource directory
        target: Target exactly as given on the command line
        suffix: Multilib directory suffix
        component: Runtime component (e.g., 'builtins', 'asan', 'profile')
        kind: Artifact kind

    Returns:
        Path like '<resource-dir>/lib/<target><suffix>/libclang_rt.<component>.a'

    Example:
        >>> compiler_rt_path('/res', 'arm-linux-ohos', '', 'builtins', ArtifactKind.OBJECT)
        '/res/lib/arm-linux-ohos/clang_rt.builtins.o'
    """
    filename = f"{kind.prefix}clang_rt.{component}{kind.extension}"
    return join_path(resource_dir, "lib", target, suffix, filename)
