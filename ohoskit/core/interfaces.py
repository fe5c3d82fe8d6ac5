"""
Core interfaces for ohoskit.

This module defines the narrow capability interface a target resolver offers
to an external build-orchestration component. The orchestrator only depends
on this interface, never on a concrete toolchain class.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple


class TargetResolver(ABC):
    """
    Abstract interface for components that resolve a target configuration.

    A resolver is constructed once per compiler invocation from a target
    triple, the raw driver options, a filesystem probe and the driver
    environment. Its answers never change after construction.
    """

    @abstractmethod
    def select_multilib(self) -> Any:
        """
        Get the multilib variant selected for this invocation.

        Returns:
            MultilibVariant chosen from the catalog (never None)
        """
        pass

    @abstractmethod
    def compute_sysroot(self) -> str:
        """
        Get the system root directory.

        Returns:
            Sysroot path, or an empty string meaning "use the system default"
        """
        pass

    @abstractmethod
    def library_search_paths(self) -> Tuple[str, ...]:
        """
        Get existing library directories, most specific first.

        Returns:
            Tuple of directory paths confirmed to exist
        """
        pass

    @abstractmethod
    def runtime_path(self) -> Optional[str]:
        """
        Get the compiler runtime library directory.

        Returns:
            Directory path, or None if no candidate exists
        """
        pass

    @abstractmethod
    def cxx_stdlib_path(self) -> Optional[str]:
        """
        Get the C++ standard library directory.

        Returns:
            Directory path, or None if no candidate exists
        """
        pass

    @abstractmethod
    def dynamic_linker(self) -> str:
        """
        Get the absolute path of the dynamic loader on the target.

        Returns:
            Loader path (e.g., "/system/bin/linker64", "/lib/ld-musl-arm.so.1")
        """
        pass

    @abstractmethod
    def compiler_rt(self, component: str, kind: Any) -> str:
        """
        Get the absolute path of a compiler runtime artifact.

        Args:
            component: Runtime component name (e.g., "builtins", "asan")
            kind: ArtifactKind (object, static archive or shared object)

        Returns:
            Absolute artifact path
        """
        pass

    @abstractmethod
    def linker_flags(self) -> Tuple[str, ...]:
        """
        Get the fixed target-specific linker flags.

        Returns:
            Tuple of linker flag tokens in the order they must be passed
        """
        pass

    @abstractmethod
    def supported_sanitizers(self) -> Any:
        """
        Get the sanitizers supported on this target.

        Returns:
            SanitizerKind bitmask
        """
        pass

    @abstractmethod
    def resolve(self) -> Any:
        """
        Get the complete resolved configuration.

        Returns:
            Immutable ResolvedConfiguration
        """
        pass


__all__ = [
    "TargetResolver",
]
