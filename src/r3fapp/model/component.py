"""Component model: scanned elements and the styled components synthesized from them."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ScannedElement:
    """One element carrying a literal style-class attribute, in scan order."""

    path: str
    tag: str
    index: int
    class_string: str


@dataclass(frozen=True)
class SynthesizedComponent:
    """A generated styled component replacing one distinct class string.

    Attributes:
        name: Exported identifier, e.g. ``LayoutStyle1``.
        path: Project-relative path of the markup file it came from.
        style_path: Project-relative path of the companion style file.
        class_string: The original attribute value, used to find it again.
        tag: Element tag the template is bound to.
        body: The full ``export const ... = styled...`` source.
    """

    name: str
    path: str
    style_path: str
    class_string: str
    tag: str
    body: str


@dataclass
class ComponentCollection:
    """Every component synthesized during one migration run, in creation order."""

    components: list[SynthesizedComponent] = field(default_factory=list)

    def add(self, component: SynthesizedComponent) -> None:
        if self.find(component.path, component.class_string) is not None:
            raise ValueError(
                f"Duplicate component for {component.class_string!r} in {component.path}"
            )
        self.components.append(component)

    def find(self, path: str, class_string: str) -> SynthesizedComponent | None:
        for component in self.components:
            if component.path == path and component.class_string == class_string:
                return component
        return None

    def for_file(self, path: str) -> list[SynthesizedComponent]:
        return [c for c in self.components if c.path == path]

    def by_style_path(self) -> dict[str, list[SynthesizedComponent]]:
        """Group components by companion file, preserving creation order."""
        grouped: dict[str, list[SynthesizedComponent]] = {}
        for component in self.components:
            grouped.setdefault(component.style_path, []).append(component)
        return grouped

    def __len__(self) -> int:
        return len(self.components)
