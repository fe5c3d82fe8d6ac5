"""
Target triple parsing.

A target triple names the architecture, vendor, operating system and
environment of a compilation target, e.g. ``aarch64-linux-ohos9.2.1`` or
``arm-liteos``. The environment component also tells which C library
family the target uses and may carry an OS version suffix.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from ohoskit.core.exceptions import TripleError

KNOWN_OS_NAMES = ("linux", "liteos", "none")

SIXTY_FOUR_BIT_ARCHES = (
    "aarch64",
    "aarch64_be",
    "x86_64",
    "riscv64",
    "mips64",
    "mips64el",
)

ARM_ARCHES = ("arm", "armeb", "thumb", "thumbeb")

_ENV_RE = re.compile(r"^(?P<name>[A-Za-z_]*?)(?P<version>\d+(?:\.\d+)*)?$")
_OS_RE = re.compile(r"^(?P<name>[A-Za-z_]+)[\d.]*$")


class LibcFamily(Enum):
    """C library family, which decides the dynamic loader convention."""

    BIONIC = "bionic"
    MUSL = "musl"


def parse_arch(arch_name: str) -> str:
    """
    Map a raw architecture spelling to its canonical name.

    Args:
        arch_name: Architecture component of a triple (e.g., 'armv7a', 'arm64')

    Returns:
        Canonical architecture name, or 'unknown'

    Example:
        >>> parse_arch('armv7a')
        'arm'
        >>> parse_arch('thumbv7eb')
        'thumbeb'
    """
    name = arch_name.lower()

    if name in ("aarch64", "arm64"):
        return "aarch64"
    if name == "aarch64_be":
        return "aarch64_be"
    if name.startswith("thumb"):
        return "thumbeb" if name.endswith("eb") else "thumb"
    if name.startswith("arm"):
        return "armeb" if name.endswith("eb") else "arm"
    if name in ("x86_64", "amd64"):
        return "x86_64"
    if name == "x86" or re.fullmatch(r"i[3-6]86", name):
        return "x86"
    if name in ("riscv32", "riscv64"):
        return name
    if name in ("mips", "mipsel", "mips64", "mips64el"):
        return name
    return "unknown"


def _parse_version(version: str) -> Tuple[int, int, int]:
    if not version:
        return (0, 0, 0)
    numbers = [int(part) for part in version.split(".")[:3]]
    numbers += [0] * (3 - len(numbers))
    return (numbers[0], numbers[1], numbers[2])


@dataclass(frozen=True)
class TargetTriple:
    """
    Parsed target triple.

    Attributes:
        text: Triple exactly as given
        arch: Canonical architecture ('arm', 'aarch64', 'x86_64', ...)
        arch_name: Raw architecture spelling ('armv7a', 'i686', ...)
        vendor: Vendor component ('unknown' when omitted)
        os: Operating system name without any version ('linux', 'liteos')
        environment: Environment name without version ('ohos', 'ohosmusl', '')
        environment_version: (major, minor, micro), missing parts are 0
        family: C library family
        os_component: OS component as written
        env_component: Environment component as written, version included
    """

    text: str
    arch: str
    arch_name: str
    vendor: str
    os: str
    environment: str
    environment_version: Tuple[int, int, int]
    family: LibcFamily
    os_component: str = ""
    env_component: str = ""

    @property
    def normalized(self) -> str:
        """Canonical 'arch-vendor-os[-env]' spelling."""
        parts = [self.arch_name, self.vendor, self.os_component or self.os]
        if self.env_component:
            parts.append(self.env_component)
        return "-".join(parts)

    @property
    def is_liteos(self) -> bool:
        return self.os == "liteos"

    @property
    def is_musl(self) -> bool:
        return self.family is LibcFamily.MUSL

    @property
    def is_bionic(self) -> bool:
        return self.family is LibcFamily.BIONIC

    @property
    def is_arm(self) -> bool:
        """True for every 32-bit ARM flavour, Thumb and big-endian included."""
        return self.arch in ARM_ARCHES

    @property
    def is_64bit(self) -> bool:
        return self.arch in SIXTY_FOUR_BIT_ARCHES

    def __str__(self) -> str:
        return self.text


def _libc_family(os_name: str, environment: str) -> LibcFamily:
    if os_name == "liteos":
        return LibcFamily.MUSL
    if environment.startswith("ohosmusl") or environment.startswith("musl"):
        return LibcFamily.MUSL
    if environment == "ohos":
        return LibcFamily.BIONIC
    return LibcFamily.MUSL


def parse_triple(text: str) -> TargetTriple:
    """
    Parse a target triple string.

    Accepted shapes are ``arch-os``, ``arch-os-env``, ``arch-vendor-os`` and
    ``arch-vendor-os-env``. When the second component is a known OS name the
    vendor is taken to be omitted.

    Args:
        text: Target triple (e.g., 'aarch64-linux-ohos9.2', 'arm-liteos')

    Returns:
        Parsed TargetTriple

    Raises:
        TripleError: If the triple has fewer than two components

    Example:
        >>> triple = parse_triple('aarch64-linux-ohos9.2')
        >>> triple.normalized
        'aarch64-unknown-linux-ohos9.2'
        >>> triple.environment_version
        (9, 2, 0)
    """
    if not text or not text.strip():
        raise TripleError(text, "empty triple")

    parts = text.strip().split("-")
    if len(parts) < 2 or not parts[0]:
        raise TripleError(text, "expected at least 'arch-os'")

    arch_name = parts[0]
    rest = parts[1:]

    if len(rest) == 1:
        vendor, os_component, env_component = "unknown", rest[0], ""
    elif len(rest) == 2:
        if _os_name(rest[0]) in KNOWN_OS_NAMES:
            vendor, os_component, env_component = "unknown", rest[0], rest[1]
        else:
            vendor, os_component, env_component = rest[0], rest[1], ""
    else:
        vendor, os_component = rest[0], rest[1]
        env_component = "-".join(rest[2:])

    if not os_component:
        raise TripleError(text, "missing operating system")

    os_name = _os_name(os_component)

    match = _ENV_RE.match(env_component)
    if match:
        environment = match.group("name")
        version = _parse_version(match.group("version") or "")
    else:
        environment = env_component
        version = (0, 0, 0)

    return TargetTriple(
        text=text,
        arch=parse_arch(arch_name),
        arch_name=arch_name,
        vendor=vendor or "unknown",
        os=os_name,
        environment=environment,
        environment_version=version,
        family=_libc_family(os_name, environment),
        os_component=os_component,
        env_component=env_component,
    )


def _os_name(os_component: str) -> str:
    match = _OS_RE.match(os_component)
    return match.group("name").lower() if match else os_component.lower()
