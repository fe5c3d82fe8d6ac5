"""
Sysroot and search-path resolution.

OHOS sysroots keep a library directory per supported OS version next to
unversioned libraries in the usual multiarch directory::

    <sysroot>/usr/lib/aarch64-linux-ohos/9.2.1/
    <sysroot>/usr/lib/aarch64-linux-ohos/9.2/
    <sysroot>/usr/lib/aarch64-linux-ohos/9/
    <sysroot>/usr/lib/aarch64-linux-ohos/

Search lists are built from the most to the least specific candidate and
contain only directories the probe confirms to exist.
"""

import logging
from typing import Iterable, List, Sequence, Tuple

from ohoskit.core.filesystem import Probe, join_path

logger = logging.getLogger(__name__)

# Relative to the directory the compiler binary is installed in.
SYSROOT_RELATIVE_PATH = "../../sysroot"


def compute_sysroot(sysroot_override: str, installed_dir: str, probe: Probe) -> str:
    """
    Determine the sysroot.

    Args:
        sysroot_override: Sysroot forced by the driver or --sysroot, may be ''
        installed_dir: Directory the compiler binary is installed in
        probe: Filesystem existence probe

    Returns:
        Sysroot path, or '' meaning "use the system default"
    """
    if sysroot_override:
        return sysroot_override

    if installed_dir:
        candidate = f"{installed_dir}/{SYSROOT_RELATIVE_PATH}"
        if probe(candidate):
            logger.debug(f"Using bundled sysroot {candidate}")
            return candidate

    logger.debug("No sysroot found, deferring to the system default")
    return ""


def add_path_if_exists(path: str, paths: List[str], probe: Probe) -> bool:
    """
    Append a path to a search list if it exists.

    Returns:
        True if the path was appended
    """
    if probe(path):
        paths.append(path)
        return True
    logger.debug(f"Skipping missing search path {path}")
    return False


def existing_paths(candidates: Iterable[str], probe: Probe) -> Tuple[str, ...]:
    """Filter candidates down to the existing ones, keeping their order."""
    paths: List[str] = []
    for candidate in candidates:
        add_path_if_exists(candidate, paths, probe)
    return tuple(paths)


class SysrootLayout:
    """
    Search paths inside one sysroot for one multiarch triple.

    Attributes:
        sysroot: Sysroot path ('' for the system root)
        multiarch_triple: Multiarch directory name
        probe: Filesystem existence probe
    """

    def __init__(self, sysroot: str, multiarch_triple: str, probe: Probe):
        self.sysroot = sysroot
        self.multiarch_triple = multiarch_triple
        self.probe = probe

    @property
    def multiarch_lib_dir(self) -> str:
        return f"{self.sysroot}/usr/lib/{self.multiarch_triple}"

    def library_candidates(
        self, version: Tuple[int, int, int], suffix: str = ""
    ) -> Tuple[str, ...]:
        """
        Get library directory candidates, most specific first.

        Args:
            version: Target OS version (major, minor, micro)
            suffix: Multilib directory suffix

        Returns:
            Versioned candidates followed by the unversioned one
        """
        major, minor, micro = version
        base = self.multiarch_lib_dir
        return (
            f"{base}/{major}.{minor}.{micro}{suffix}",
            f"{base}/{major}.{minor}{suffix}",
            f"{base}/{major}{suffix}",
            f"{base}{suffix}",
        )

    def library_search_paths(
        self, version: Tuple[int, int, int], suffix: str = ""
    ) -> Tuple[str, ...]:
        """Get the existing library directories, most specific first."""
        return existing_paths(self.library_candidates(version, suffix), self.probe)

    def include_candidates(
        self, c_include_dirs: Sequence[str] = ()
    ) -> Tuple[str, ...]:
        """
        Get C system include directory candidates.

        Configure-time include directories replace the default layout
        entirely; absolute ones are re-rooted under the sysroot.
        """
        if c_include_dirs:
            return tuple(
                self.sysroot + d if d.startswith("/") else d for d in c_include_dirs
            )

        return (
            f"{self.sysroot}/usr/include/{self.multiarch_triple}",
            f"{self.sysroot}/include",
            f"{self.sysroot}/usr/include",
        )

    def include_dirs(self, c_include_dirs: Sequence[str] = ()) -> Tuple[str, ...]:
        """Get the existing C system include directories."""
        return existing_paths(self.include_candidates(c_include_dirs), self.probe)


def arch_specific_lib_path(resource_dir: str, os_name: str, arch_name: str) -> str:
    """Get '<resource-dir>/lib/<os>/<arch>', the per-architecture runtime directory."""
    return join_path(resource_dir, "lib", os_name, arch_name)
