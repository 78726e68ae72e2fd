"""r3fapp model layer -- public type re-exports."""

from r3fapp.model.component import ComponentCollection, ScannedElement, SynthesizedComponent
from r3fapp.model.style import RESERVED_KEYS, ClassNameInfo, StyleTable

__all__ = [
    # style
    "RESERVED_KEYS",
    "ClassNameInfo",
    "StyleTable",
    # component
    "ScannedElement",
    "SynthesizedComponent",
    "ComponentCollection",
]
