"""
Multilib catalog and selection.

A multilib is a variant of the runtime and library layout, kept in its own
directory suffix, built for a particular CPU / FPU / float ABI combination.
Exactly one variant is selected per invocation; the default variant has no
requirements and always matches.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ohoskit.toolchain.flags import FlagSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MultilibVariant:
    """
    One multilib variant.

    Attributes:
        name: Variant identifier, also the directory name ('' for the default)
        required: Predicates that must all hold for the variant to match
        priority: Matching variants with higher priority win
    """

    name: str = ""
    required: Tuple[str, ...] = ()
    priority: int = 0

    @property
    def suffix(self) -> str:
        """Directory suffix appended to search paths ('' or '/<name>')."""
        return f"/{self.name}" if self.name else ""

    @property
    def is_default(self) -> bool:
        return not self.required

    def matches(self, flags: FlagSet) -> bool:
        """True if every required predicate is present."""
        return all(predicate in flags for predicate in self.required)


DEFAULT_MULTILIB = MultilibVariant()

OHOS_MULTILIBS: Tuple[MultilibVariant, ...] = (
    DEFAULT_MULTILIB,
    MultilibVariant(
        "a7_soft",
        ("mcpu=cortex-a7", "mfloat-abi=soft"),
        priority=1,
    ),
    MultilibVariant(
        "a7_softfp_neon-vfpv4",
        ("mcpu=cortex-a7", "mfloat-abi=softfp", "mfpu=neon-vfpv4"),
        priority=1,
    ),
    MultilibVariant(
        "a7_hard_neon-vfpv4",
        ("mcpu=cortex-a7", "mfloat-abi=hard", "mfpu=neon-vfpv4"),
        priority=1,
    ),
)


class MultilibSet:
    """
    Ordered multilib catalog.

    Example:
        >>> catalog = MultilibSet()
        >>> catalog.select(FlagSet({"mcpu=cortex-a7", "mfloat-abi=soft"})).name
        'a7_soft'
    """

    def __init__(self, variants: Optional[Sequence[MultilibVariant]] = None):
        self.variants: Tuple[MultilibVariant, ...] = tuple(
            variants if variants is not None else OHOS_MULTILIBS
        )

    def __iter__(self):
        return iter(self.variants)

    def __len__(self) -> int:
        return len(self.variants)

    def compatible(self, flags: FlagSet) -> Tuple[MultilibVariant, ...]:
        """Get every variant whose requirements hold, in catalog order."""
        return tuple(v for v in self.variants if v.matches(flags))

    def select(self, flags: FlagSet) -> MultilibVariant:
        """
        Select the variant for a flag set.

        The highest-priority matching variant wins, a specific variant beats
        the default at equal priority, and among the rest the one declared
        first wins. The default variant is returned when nothing matches,
        including for a catalog without one.

        Args:
            flags: Normalized predicate set

        Returns:
            Selected MultilibVariant
        """
        candidates = self.compatible(flags)
        if not candidates:
            logger.debug("No multilib matched, using the default")
            return DEFAULT_MULTILIB

        selected = candidates[0]
        for variant in candidates[1:]:
            if (variant.priority, not variant.is_default) > (
                selected.priority,
                not selected.is_default,
            ):
                selected = variant

        logger.debug(f"Selected multilib '{selected.name or 'default'}'")
        return selected
