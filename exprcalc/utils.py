import enum
from typing import Any, Optional, TypeVar

E = TypeVar("E", bound="PrintableEnum")


class PrintableEnum(enum.Enum):
    def __str__(self) -> str:
        return self.name

    __repr__ = __str__

    @classmethod
    def lookup(cls: type[E], value: Any) -> Optional[E]:
        """Like ``cls(value)``, but None for unknown values"""
        try:
            return cls(value)
        except ValueError:
            return None


def point_at(text: str, idx: int, context: int = 10) -> tuple[str, str]:
    """Cuts ``text`` down to ``context`` characters on each side of ``idx``.

    Returns the cut (with "..." where something was dropped) and a line with a caret under ``idx``.
    """
    start = max(0, idx - context)
    end = min(len(text), idx + context)
    prefix = "..." if start > 0 else ""
    suffix = "..." if end < len(text) else ""
    return prefix + text[start:end] + suffix, " " * (len(prefix) + idx - start) + "^"
