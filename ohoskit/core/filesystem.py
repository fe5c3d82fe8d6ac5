"""
Filesystem existence probes.

The resolver never touches the disk directly. Every existence check goes
through a probe, a plain callable mapping a path string to a boolean, so the
same fallback chains can run against the host filesystem or against an
in-memory listing.

Usage:
    from ohoskit.core.filesystem import VirtualFileSystem, RecordingProbe

    vfs = VirtualFileSystem(["/sysroot/usr/lib/aarch64-linux-ohos"])
    probe = RecordingProbe(vfs)
    probe("/sysroot/usr/lib")  # True, ancestors exist implicitly
    probe.queries              # ['/sysroot/usr/lib']
"""

import logging
import os
import posixpath
from pathlib import Path
from typing import Callable, Iterable, List, Union

import yaml

from ohoskit.core.exceptions import VirtualFileSystemError

logger = logging.getLogger(__name__)

Probe = Callable[[str], bool]


def host_probe(path: str) -> bool:
    """Check whether a path exists on the host filesystem."""
    return os.path.exists(path)


def join_path(base: str, *parts: str) -> str:
    """
    Append path components to a base path.

    Empty components are skipped and separators between components are
    collapsed, so a multilib suffix of '' or '/a7_soft' can be appended
    the same way. '..' segments are kept as written.

    Example:
        >>> join_path("/res", "lib", "aarch64-linux-ohos", "/a7_soft")
        '/res/lib/aarch64-linux-ohos/a7_soft'
        >>> join_path("/toolchain/bin", "../lib", "c++", "")
        '/toolchain/bin/../lib/c++'
    """
    result = base
    for part in parts:
        part = part.strip("/")
        if not part:
            continue
        result = f"{result.rstrip('/')}/{part}" if result else part
    return result


def _normalize(path: str) -> str:
    normalized = posixpath.normpath(path)
    # normpath keeps a leading '//' as-is
    if normalized.startswith("//"):
        normalized = "/" + normalized.lstrip("/")
    return normalized


class VirtualFileSystem:
    """
    In-memory set of existing paths.

    Adding a path also marks every one of its ancestors as existing, the way
    a real directory tree behaves. Lookups normalize '..' and '.' segments,
    so '/toolchain/bin/../../sysroot' finds '/sysroot'.

    Instances are callable and can be passed anywhere a probe is expected.
    """

    def __init__(self, paths: Iterable[str] = ()):
        self._paths = set()
        for path in paths:
            self.add(path)

    def add(self, path: str) -> None:
        """Mark a path (and all its ancestors) as existing."""
        if not path:
            raise VirtualFileSystemError("Cannot add an empty path")

        current = _normalize(path)
        while current not in self._paths:
            self._paths.add(current)
            parent = posixpath.dirname(current)
            if parent == current or not parent:
                break
            current = parent

    def exists(self, path: str) -> bool:
        """Check whether a path exists in the virtual tree."""
        if not path:
            return False
        return _normalize(path) in self._paths

    def __call__(self, path: str) -> bool:
        return self.exists(path)

    def __contains__(self, path: str) -> bool:
        return self.exists(path)

    def __len__(self) -> int:
        return len(self._paths)

    @classmethod
    def from_yaml(cls, listing_file: Union[str, Path]) -> "VirtualFileSystem":
        """
        Load a virtual filesystem from a YAML listing.

        The listing is a mapping with a ``paths`` key holding a list of
        path strings::

            paths:
              - /opt/ohos/sysroot/usr/lib/aarch64-linux-ohos
              - /opt/ohos/lib/clang/12.0.1/lib/aarch64-linux-ohos

        Args:
            listing_file: Path to the YAML listing

        Returns:
            VirtualFileSystem containing every listed path

        Raises:
            VirtualFileSystemError: If the file is missing or malformed
        """
        listing_file = Path(listing_file)
        if not listing_file.exists():
            raise VirtualFileSystemError(f"Listing file not found: {listing_file}")

        try:
            with open(listing_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise VirtualFileSystemError(f"Invalid YAML in {listing_file}: {e}") from e

        if not isinstance(data, dict) or "paths" not in data:
            raise VirtualFileSystemError(
                f"Listing {listing_file} must be a mapping with a 'paths' key"
            )

        paths = data["paths"] or []
        if not isinstance(paths, list) or not all(isinstance(p, str) for p in paths):
            raise VirtualFileSystemError(
                f"'paths' in {listing_file} must be a list of strings"
            )

        logger.debug(f"Loaded {len(paths)} path(s) from {listing_file}")
        return cls(paths)


class RecordingProbe:
    """Probe wrapper that records every queried path in order."""

    def __init__(self, probe: Probe):
        self._probe = probe
        self.queries: List[str] = []
        self.hits: List[str] = []

    def __call__(self, path: str) -> bool:
        self.queries.append(path)
        found = self._probe(path)
        if found:
            self.hits.append(path)
        return found

    def reset(self) -> None:
        """Forget all recorded queries."""
        self.queries.clear()
        self.hits.clear()
