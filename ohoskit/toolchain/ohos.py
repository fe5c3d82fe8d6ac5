"""
OHOS target resolution.

This module ties the pieces together: it normalizes the driver options,
selects a multilib, locates the sysroot, runtime and C++ standard library,
names the dynamic linker and collects the fixed link policy into one
immutable ResolvedConfiguration.

Example:
    ```python
    from ohoskit.core.filesystem import VirtualFileSystem
    from ohoskit.toolchain import DriverEnvironment, OHOSToolchain

    env = DriverEnvironment(
        installed_dir="/opt/ohos/llvm/bin",
        resource_dir="/opt/ohos/llvm/lib/clang/12.0.1",
        driver_dir="/opt/ohos/llvm/bin",
    )
    toolchain = OHOSToolchain(
        "arm-linux-ohosmusl",
        ["-mcpu=cortex-a7", "-mfloat-abi=hard", "-mfpu=neon-vfpv4"],
        env,
        probe=VirtualFileSystem(["/opt/ohos/sysroot/usr/lib/arm-linux-ohosmusl"]),
    )
    config = toolchain.resolve()
    print(config.multilib_suffix)   # /a7_hard_neon-vfpv4
    print(config.dynamic_linker)    # /lib/ld-musl-armhf.so.1
    ```
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from ohoskit.core.filesystem import Probe, host_probe, join_path
from ohoskit.core.interfaces import TargetResolver
from ohoskit.cross.multiarch import get_multiarch_triple
from ohoskit.cross.sysroot import (
    SysrootLayout,
    arch_specific_lib_path,
    compute_sysroot,
    existing_paths,
)
from ohoskit.cross.triple import TargetTriple, parse_triple
from ohoskit.toolchain.args import ArgList
from ohoskit.toolchain.diagnostics import (
    Diagnostic,
    DiagnosticLevel,
    DiagnosticsEngine,
)
from ohoskit.toolchain.environment import DriverEnvironment
from ohoskit.toolchain.flags import FlagSet, FloatABI, get_float_abi, normalize_flags
from ohoskit.toolchain.linker import (
    get_dynamic_linker,
    get_linker_flags,
    get_profile_link_args,
    get_target_cc1_args,
)
from ohoskit.toolchain.multilib import MultilibSet, MultilibVariant
from ohoskit.toolchain.runtime import (
    CXX_STDLIB_LINK_ARGS,
    ArtifactKind,
    compiler_rt_path,
    cxx_stdlib_path_candidates,
    first_existing,
    get_cxx_stdlib_type,
    get_runtime_lib_type,
    runtime_path_candidates,
)
from ohoskit.toolchain.sanitizers import (
    SanitizerKind,
    get_supported_sanitizers,
    sanitizer_names,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedConfiguration:
    """
    Everything a compile/link command builder needs for one OHOS target.

    All sequences are tuples and keep the order the resolver assigned;
    earlier search entries must be searched first.
    """

    target: str
    triple: TargetTriple
    environment: DriverEnvironment
    float_abi: FloatABI
    multilib: MultilibVariant
    sysroot: str
    multiarch_triple: str
    include_dirs: Tuple[str, ...]
    cxx_include_dirs: Tuple[str, ...]
    library_dirs: Tuple[str, ...]
    file_paths: Tuple[str, ...]
    runtime_dir: Optional[str]
    cxx_stdlib_dir: Optional[str]
    runtime_lib: str
    cxx_stdlib: str
    dynamic_linker: str
    linker_flags: Tuple[str, ...]
    cxx_stdlib_link_args: Tuple[str, ...]
    target_cc1_args: Tuple[str, ...]
    profile_link_args: Tuple[str, ...]
    sanitizers: SanitizerKind
    diagnostics: Tuple[Diagnostic, ...] = field(default=())

    @property
    def multilib_suffix(self) -> str:
        return self.multilib.suffix

    @property
    def library_paths(self) -> Tuple[str, ...]:
        """Runtime library directories ('-L' paths owned by the compiler)."""
        return (self.runtime_dir,) if self.runtime_dir else ()

    def compiler_rt(
        self, component: str, kind: Union[ArtifactKind, str] = ArtifactKind.STATIC
    ) -> str:
        """
        Get the path of a compiler-rt artifact.

        Args:
            component: Runtime component (e.g., 'builtins')
            kind: ArtifactKind or its name ('object', 'static', 'shared')

        Returns:
            Absolute artifact path under the resource directory
        """
        if isinstance(kind, str):
            kind = ArtifactKind.from_name(kind)
        return compiler_rt_path(
            self.environment.resource_dir,
            self.target,
            self.multilib_suffix,
            component,
            kind,
        )

    def has_errors(self) -> bool:
        return any(d.level is DiagnosticLevel.ERROR for d in self.diagnostics)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to plain data for JSON/YAML output."""
        return {
            "target": self.target,
            "normalized_triple": self.triple.normalized,
            "libc": self.triple.family.value,
            "float_abi": self.float_abi.value,
            "multilib": self.multilib.name or "default",
            "multilib_suffix": self.multilib_suffix,
            "sysroot": self.sysroot,
            "multiarch_triple": self.multiarch_triple,
            "include_dirs": list(self.include_dirs),
            "cxx_include_dirs": list(self.cxx_include_dirs),
            "library_dirs": list(self.library_dirs),
            "file_paths": list(self.file_paths),
            "runtime_dir": self.runtime_dir,
            "cxx_stdlib_dir": self.cxx_stdlib_dir,
            "runtime_lib": self.runtime_lib,
            "cxx_stdlib": self.cxx_stdlib,
            "dynamic_linker": self.dynamic_linker,
            "linker_flags": list(self.linker_flags),
            "cxx_stdlib_link_args": list(self.cxx_stdlib_link_args),
            "target_cc1_args": list(self.target_cc1_args),
            "profile_link_args": list(self.profile_link_args),
            "sanitizers": sanitizer_names(self.sanitizers),
            "diagnostics": [str(d) for d in self.diagnostics],
        }


class OHOSToolchain(TargetResolver):
    """
    Target resolver for OHOS and LiteOS.

    One instance serves one compiler invocation. Everything is computed
    in the constructor; afterwards the instance only answers questions.
    """

    def __init__(
        self,
        target: Union[str, TargetTriple],
        args: Union[ArgList, Iterable[str]] = (),
        environment: Optional[DriverEnvironment] = None,
        probe: Optional[Probe] = None,
        multilibs: Optional[MultilibSet] = None,
    ):
        """
        Initialize and resolve the target.

        Args:
            target: Target triple as given on the command line
            args: Raw driver options in command-line order
            environment: Driver environment (defaults to an empty one)
            probe: Filesystem existence probe (defaults to the host filesystem)
            multilibs: Multilib catalog (defaults to the OHOS catalog)

        Raises:
            TripleError: If the target triple cannot be parsed
        """
        self.triple = target if isinstance(target, TargetTriple) else parse_triple(target)
        self.target = self.triple.text
        self.args = args if isinstance(args, ArgList) else ArgList(args)
        self.environment = (
            environment if environment is not None else DriverEnvironment()
        )
        self.probe = probe if probe is not None else host_probe
        self.multilibs = multilibs if multilibs is not None else MultilibSet()
        self.diagnostics = DiagnosticsEngine()

        self.float_abi = get_float_abi(self.args, self.diagnostics)
        self.flags: FlagSet = normalize_flags(self.args, self.float_abi)
        self.multilib = self.multilibs.select(self.flags)

        self.runtime_lib = get_runtime_lib_type(self.args, self.diagnostics)
        self.cxx_stdlib = get_cxx_stdlib_type(self.args, self.diagnostics)

        self.sysroot = compute_sysroot(
            self.args.last_value("--sysroot=") or self.environment.sysroot_override,
            self.environment.installed_dir,
            self.probe,
        )
        self.multiarch_triple = get_multiarch_triple(self.triple)
        self.layout = SysrootLayout(self.sysroot, self.multiarch_triple, self.probe)

        self._runtime_dir = first_existing(
            runtime_path_candidates(
                self.environment.resource_dir,
                self._target_names(),
                self.multilib.suffix,
            ),
            self.probe,
        )
        self._cxx_stdlib_dir = first_existing(
            cxx_stdlib_path_candidates(
                self.environment.driver_dir,
                self._target_names(),
                self.multilib.suffix,
            ),
            self.probe,
        )
        self._library_dirs = self.layout.library_search_paths(
            self.triple.environment_version, self.multilib.suffix
        )

        self._config = self._build_configuration()
        logger.debug(
            f"Resolved {self.target}: multilib '{self.multilib.name or 'default'}', "
            f"sysroot '{self.sysroot}', {len(self._library_dirs)} library dir(s)"
        )

    def _target_names(self) -> Tuple[str, str, str]:
        # literal target, normalized triple, multiarch triple
        return (self.target, self.triple.normalized, self.multiarch_triple)

    # ------------------------------------------------------------------
    # TargetResolver
    # ------------------------------------------------------------------

    def select_multilib(self) -> MultilibVariant:
        return self.multilib

    def compute_sysroot(self) -> str:
        return self.sysroot

    def library_search_paths(self) -> Tuple[str, ...]:
        return self._library_dirs

    def runtime_path(self) -> Optional[str]:
        return self._runtime_dir

    def cxx_stdlib_path(self) -> Optional[str]:
        return self._cxx_stdlib_dir

    def dynamic_linker(self) -> str:
        return get_dynamic_linker(self.triple, self.float_abi)

    def compiler_rt(
        self, component: str, kind: Union[ArtifactKind, str] = ArtifactKind.STATIC
    ) -> str:
        return self._config.compiler_rt(component, kind)

    def linker_flags(self) -> Tuple[str, ...]:
        return get_linker_flags(self.environment.enable_linker_build_id)

    def supported_sanitizers(self) -> SanitizerKind:
        return get_supported_sanitizers(self.triple)

    def resolve(self) -> ResolvedConfiguration:
        return self._config

    # ------------------------------------------------------------------
    # Search paths
    # ------------------------------------------------------------------

    def include_dirs(self) -> Tuple[str, ...]:
        """Get existing C system include directories in search order."""
        if self.args.has_arg("-nostdinc"):
            return ()

        candidates = []
        if not self.args.has_arg("-nobuiltininc"):
            candidates.append(join_path(self.environment.resource_dir, "include"))

        builtin = existing_paths(candidates, self.probe)
        if self.args.has_arg("-nostdlibinc"):
            return builtin

        return builtin + self.layout.include_dirs(self.environment.c_include_dirs)

    def cxx_include_dirs(self) -> Tuple[str, ...]:
        """Get the existing libc++ header directory."""
        if self.args.has_arg("-nostdlibinc", "-nostdinc++"):
            return ()
        candidate = join_path(self.environment.driver_dir, "..", "include", "c++", "v1")
        return existing_paths([candidate], self.probe)

    def file_paths(self) -> Tuple[str, ...]:
        """
        Get the directories the linker searches for libraries.

        The C++ standard library directory (C++ mode only) comes first, then
        the per-architecture runtime directory, then the sysroot libraries.
        """
        paths = []
        if self.environment.cxx_mode and self._cxx_stdlib_dir:
            paths.append(self._cxx_stdlib_dir)

        arch_lib = arch_specific_lib_path(
            self.environment.resource_dir, self.triple.os, self.triple.arch_name
        )
        paths.extend(existing_paths([arch_lib], self.probe))
        paths.extend(self._library_dirs)
        return tuple(paths)

    def _build_configuration(self) -> ResolvedConfiguration:
        profile_runtime = compiler_rt_path(
            self.environment.resource_dir,
            self.target,
            self.multilib.suffix,
            "profile",
            ArtifactKind.STATIC,
        )
        return ResolvedConfiguration(
            target=self.target,
            triple=self.triple,
            environment=self.environment,
            float_abi=self.float_abi,
            multilib=self.multilib,
            sysroot=self.sysroot,
            multiarch_triple=self.multiarch_triple,
            include_dirs=self.include_dirs(),
            cxx_include_dirs=self.cxx_include_dirs(),
            library_dirs=self._library_dirs,
            file_paths=self.file_paths(),
            runtime_dir=self._runtime_dir,
            cxx_stdlib_dir=self._cxx_stdlib_dir,
            runtime_lib=self.runtime_lib,
            cxx_stdlib=self.cxx_stdlib,
            dynamic_linker=self.dynamic_linker(),
            linker_flags=self.linker_flags(),
            cxx_stdlib_link_args=CXX_STDLIB_LINK_ARGS,
            target_cc1_args=get_target_cc1_args(self.args),
            profile_link_args=get_profile_link_args(self.args, profile_runtime),
            sanitizers=self.supported_sanitizers(),
            diagnostics=self.diagnostics.diagnostics,
        )


def resolve_target(
    target: str,
    args: Iterable[str] = (),
    environment: Optional[DriverEnvironment] = None,
    probe: Optional[Probe] = None,
) -> ResolvedConfiguration:
    """
    Resolve the configuration for one OHOS target.

    Args:
        target: Target triple as given on the command line
        args: Raw driver options in command-line order
        environment: Driver environment
        probe: Filesystem existence probe (defaults to the host filesystem)

    Returns:
        ResolvedConfiguration

    Raises:
        TripleError: If the target triple cannot be parsed
    """
    return OHOSToolchain(target, args, environment, probe).resolve()
