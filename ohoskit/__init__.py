"""
ohoskit - target configuration resolution for OHOS and LiteOS toolchains.

Given a target triple, the raw driver options and the driver environment,
ohoskit works out which multilib applies, where the sysroot, runtime and
C++ standard library live, which dynamic loader to reference and which
linker and sanitizer policy applies.
"""

from ohoskit.toolchain import (
    DriverEnvironment,
    OHOSToolchain,
    ResolvedConfiguration,
    resolve_target,
)

__all__ = [
    "DriverEnvironment",
    "OHOSToolchain",
    "ResolvedConfiguration",
    "resolve_target",
]
