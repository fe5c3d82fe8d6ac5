"""
Core functionality for ohoskit.

This package contains the foundational modules that other components depend on.
"""

from .exceptions import (
    OhosKitError,
    TripleError,
    ConfigurationError,
    VirtualFileSystemError,
)

from .filesystem import (
    Probe,
    host_probe,
    join_path,
    VirtualFileSystem,
    RecordingProbe,
)

from .interfaces import TargetResolver

__all__ = [
    "OhosKitError",
    "TripleError",
    "ConfigurationError",
    "VirtualFileSystemError",
    "Probe",
    "host_probe",
    "join_path",
    "VirtualFileSystem",
    "RecordingProbe",
    "TargetResolver",
]
