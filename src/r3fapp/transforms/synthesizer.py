"""Component synthesis: class strings -> styled-component definitions."""

from __future__ import annotations

import logging
from pathlib import PurePosixPath
from typing import Sequence

from r3fapp.model.component import ComponentCollection, ScannedElement, SynthesizedComponent
from r3fapp.model.style import StyleTable
from r3fapp.parser.markup import ScanMatch

logger = logging.getLogger(__name__)

Context = tuple[str, ...]


def component_name(path: str, index: int, suffix: str = "Style") -> str:
    """``components/layout.jsx``, 0 -> ``LayoutStyle``; index 2 -> ``LayoutStyle2``."""
    stem = PurePosixPath(path).stem
    return f"{stem[:1].upper()}{stem[1:]}{suffix}{index if index > 0 else ''}"


def style_path_for(path: str, style_suffix: str = ".style") -> str:
    """Companion file path: ``dom/Layout.jsx`` -> ``dom/Layout.style.jsx``."""
    p = PurePosixPath(path)
    return str(p.with_name(f"{p.stem}{style_suffix}{p.suffix}"))


def styled_target(tag: str) -> str:
    """``div`` -> ``styled.div``; components such as ``Link`` -> ``styled(Link)``."""
    if tag[:1].islower() and tag.replace("-", "").isalnum():
        return f"styled.{tag}"
    return f"styled({tag})"


def resolve_declarations(class_string: str, table: StyleTable) -> dict[Context, dict[str, str]]:
    """Merge each token's declarations, grouped by selector context.

    The unconditional group always comes first; other contexts follow in the
    order they are first seen. Unknown tokens are dropped.
    """
    groups: dict[Context, dict[str, str]] = {(): {}}
    for token in class_string.split():
        infos = table.lookup(token)
        if not infos:
            logger.debug("no compiled rule for class %r, skipping", token)
            continue
        for info in infos:
            groups.setdefault(info.context, {}).update(info.declarations)
    return {ctx: decls for ctx, decls in groups.items() if decls}


def _block(context: Context, declarations: dict[str, str], depth: int) -> list[str]:
    pad = "  " * depth
    if not context:
        return [f"{pad}{prop}: {value};" for prop, value in declarations.items()]
    head, *rest = context
    return [f"{pad}{head} {{", *_block(tuple(rest), declarations, depth + 1), f"{pad}}}"]


def render_css(groups: dict[Context, dict[str, str]]) -> str:
    lines: list[str] = []
    for context, declarations in groups.items():
        lines.extend(_block(context, declarations, 1))
    return "".join(f"{line}\n" for line in lines)


def render_component(name: str, tag: str, css: str) -> str:
    return f"export const {name} = {styled_target(tag)}`\n{css}`\n"


def synthesize(
    matches: Sequence[ScanMatch],
    table: StyleTable,
    path: str,
    collection: ComponentCollection,
    *,
    name_suffix: str = "Style",
    style_suffix: str = ".style",
) -> list[ScannedElement]:
    """Add one component per distinct class string in *path* to *collection*.

    Each match carries its own element, so the tag bound to a component is
    always the tag of the element the class string was read from. Returns the
    scanned elements in scan order.
    """
    elements: list[ScannedElement] = []
    style_path = style_path_for(path, style_suffix)
    for index, match in enumerate(matches):
        class_string = match.class_string
        tag = match.element.tag
        elements.append(ScannedElement(path=path, tag=tag, index=index, class_string=class_string))

        if not class_string.strip() or collection.find(path, class_string) is not None:
            continue

        name = component_name(path, len(collection.for_file(path)), name_suffix)
        css = render_css(resolve_declarations(class_string, table))
        collection.add(
            SynthesizedComponent(
                name=name,
                path=path,
                style_path=style_path,
                class_string=class_string,
                tag=tag,
                body=render_component(name, tag, css),
            )
        )
        logger.info("synthesized %s (%s) from %r", name, tag, class_string)
    return elements
