"""Style table model: ClassNameInfo records keyed by utility class name."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping

# Keys the extractor stores on a raw rule record for its own bookkeeping.
# They never reach synthesized CSS.
RESERVED_KEYS = frozenset({"__rule", "__source", "__pseudo", "__scope", "__context"})


@dataclass(frozen=True)
class ClassNameInfo:
    """Resolved declarations for one utility class under one selector context.

    Attributes:
        name: The unescaped class name, e.g. ``hover:bg-blue-500``.
        declarations: CSS property -> value, in sheet order.
        context: Wrapper block headers, outermost first. ``()`` means the
            declarations apply unconditionally.
    """

    name: str
    declarations: dict[str, str] = field(default_factory=dict)
    context: tuple[str, ...] = ()

    @classmethod
    def from_info(cls, name: str, info: Mapping[str, Any]) -> ClassNameInfo:
        """Build from a raw extractor record, dropping the reserved keys."""
        context = tuple(info.get("__context") or ())
        declarations = {
            str(key): str(value) for key, value in info.items() if key not in RESERVED_KEYS
        }
        return cls(name=name, declarations=declarations, context=context)

    @property
    def is_conditional(self) -> bool:
        return bool(self.context)


@dataclass
class StyleTable:
    """Mapping from class name to every compiled rule that targets it."""

    entries: dict[str, tuple[ClassNameInfo, ...]] = field(default_factory=dict)

    def add(self, info: ClassNameInfo) -> None:
        self.entries[info.name] = self.entries.get(info.name, ()) + (info,)

    def lookup(self, name: str) -> tuple[ClassNameInfo, ...]:
        """Return the rules for *name*, or ``()`` if the sheet never defines it."""
        return self.entries.get(name, ())

    def __contains__(self, name: object) -> bool:
        return name in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)
