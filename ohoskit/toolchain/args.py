"""
Ordered view over raw driver options.

The driver hands over options exactly as they appeared on the command line.
Most questions asked about them are "which of these options came last?",
since later options override earlier conflicting ones.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

# Options that may take their value as the next argument.
SEPARATE_VALUE_OPTIONS = ("--sysroot", "--target", "-target")


@dataclass(frozen=True)
class Arg:
    """
    One parsed option.

    Attributes:
        option: Option name including dashes and a trailing '=' for joined
            forms (e.g., '-mfloat-abi=', '--hard-float')
        value: Option value, empty for plain flags
        spelling: Option as written on the command line
    """

    option: str
    value: str = ""
    spelling: str = ""

    def as_string(self) -> str:
        return self.spelling or f"{self.option}{self.value}"


class ArgList:
    """
    Immutable ordered list of raw driver options.

    Example:
        >>> args = ArgList(["-mfloat-abi=soft", "-mcpu=cortex-a7", "-mfloat-abi=hard"])
        >>> args.last_arg("-mfloat-abi=").value
        'hard'
    """

    def __init__(self, raw: Iterable[str] = ()):
        self._raw: Tuple[str, ...] = tuple(raw)
        self._args: Tuple[Arg, ...] = tuple(self._parse(self._raw))

    @staticmethod
    def _parse(raw: Tuple[str, ...]):
        i = 0
        while i < len(raw):
            token = raw[i]
            if token in SEPARATE_VALUE_OPTIONS and i + 1 < len(raw):
                yield Arg(token + "=", raw[i + 1], f"{token} {raw[i + 1]}")
                i += 2
                continue
            if token.startswith("-") and "=" in token:
                name, value = token.split("=", 1)
                yield Arg(name + "=", value, token)
            else:
                yield Arg(token, "", token)
            i += 1

    @property
    def raw(self) -> Tuple[str, ...]:
        return self._raw

    def __iter__(self):
        return iter(self._args)

    def __len__(self) -> int:
        return len(self._args)

    def last_arg(self, *options: str) -> Optional[Arg]:
        """
        Get the last occurrence of any of the given options.

        Args:
            *options: Option names; joined forms end with '='
                (e.g., '-mfloat-abi=', '-msoft-float')

        Returns:
            The matching Arg that appears last, or None
        """
        for arg in reversed(self._args):
            if arg.option in options:
                return arg
        return None

    def last_value(self, option: str, default: Optional[str] = None) -> Optional[str]:
        arg = self.last_arg(option)
        return arg.value if arg is not None else default

    def has_arg(self, *options: str) -> bool:
        return self.last_arg(*options) is not None

    def has_flag(self, positive: str, negative: str, default: bool) -> bool:
        """
        Resolve a positive/negative flag pair.

        Args:
            positive: Flag enabling the feature (e.g., '-fuse-init-array')
            negative: Flag disabling it (e.g., '-fno-use-init-array')
            default: Result when neither flag is present

        Returns:
            True if the last of the two flags is the positive one
        """
        arg = self.last_arg(positive, negative)
        if arg is None:
            return default
        return arg.option == positive
