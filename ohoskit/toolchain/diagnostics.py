"""
Diagnostics reported while resolving a target.

Nothing found during resolution aborts it. Problems are recorded here and
logged; the caller decides whether any of them should stop the build.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

logger = logging.getLogger(__name__)


class DiagnosticLevel(Enum):
    WARNING = "warning"
    ERROR = "error"


# code -> message template
MESSAGES = {
    "invalid-mfloat-abi": "invalid float ABI '{arg}'",
    "invalid-rtlib-name": "invalid runtime library name in argument '{arg}'",
    "invalid-stdlib-name": "invalid library name in argument '{arg}'",
}


@dataclass(frozen=True)
class Diagnostic:
    """A single reported problem."""

    level: DiagnosticLevel
    code: str
    message: str

    def __str__(self) -> str:
        return f"{self.level.value}: {self.message} [{self.code}]"


class DiagnosticsEngine:
    """Collects diagnostics in report order and logs each one."""

    def __init__(self):
        self._diagnostics: List[Diagnostic] = []

    def report(
        self, code: str, level: DiagnosticLevel = DiagnosticLevel.ERROR, **kwargs
    ) -> Diagnostic:
        """
        Report a diagnostic.

        Args:
            code: Diagnostic code (a key of MESSAGES)
            level: Severity
            **kwargs: Values for the message template

        Returns:
            The recorded Diagnostic
        """
        template = MESSAGES.get(code, code)
        diagnostic = Diagnostic(level, code, template.format(**kwargs))
        self._diagnostics.append(diagnostic)

        if level is DiagnosticLevel.ERROR:
            logger.error(diagnostic.message)
        else:
            logger.warning(diagnostic.message)
        return diagnostic

    @property
    def diagnostics(self) -> Tuple[Diagnostic, ...]:
        return tuple(self._diagnostics)

    def has_errors(self) -> bool:
        return any(d.level is DiagnosticLevel.ERROR for d in self._diagnostics)

    def __len__(self) -> int:
        return len(self._diagnostics)
