"""
Centralized exception hierarchy for ohoskit.

Resolution itself never raises: problems found while resolving a target are
reported as diagnostics. These exceptions are raised only at the edges, when
input cannot be turned into something the resolver can work with.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class OhosKitError(Exception):
    """Base exception for all ohoskit errors."""

    pass


# ============================================================================
# Input Exceptions
# ============================================================================


class TripleError(OhosKitError):
    """Raised when a target triple string cannot be parsed."""

    def __init__(self, triple: str, reason: str = ""):
        self.triple = triple
        self.reason = reason
        msg = f"Invalid target triple: '{triple}'"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class ConfigurationError(OhosKitError):
    """Raised when the driver environment or CLI configuration is invalid."""

    pass


# ============================================================================
# Filesystem Exceptions
# ============================================================================


class VirtualFileSystemError(OhosKitError):
    """Raised when a virtual filesystem listing is malformed."""

    pass
