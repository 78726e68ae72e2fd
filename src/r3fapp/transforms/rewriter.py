"""Markup rewriting: swap class-name elements for their styled components."""

from __future__ import annotations

import re
from pathlib import PurePosixPath
from typing import Sequence

from r3fapp.errors import InternalConsistencyError
from r3fapp.model.component import SynthesizedComponent
from r3fapp.parser.markup import ScanMatch

# A 'use client' directive, possibly preceded by whitespace and comments.
_DIRECTIVE_RE = re.compile(
    r"""
    \A(?:\s | //[^\n]*(?:\n|\Z) | /\*(?:[^*]|\*(?!/))*\*/)*
    (?P<q>['"])use\ client(?P=q);?[^\S\n]*(?:\n|\Z)
    """,
    re.VERBOSE,
)


def import_specifier(style_path: str, source_dirs: Sequence[str] = ("src", "app"), alias: str = "@") -> str:
    """Module specifier for a companion file.

    ``src/components/dom/Layout.style.jsx`` -> ``@/components/dom/Layout.style``
    when ``src`` is one of *source_dirs*; otherwise the extensionless path.
    """
    p = PurePosixPath(style_path)
    parts = p.with_suffix("").parts
    if alias and parts and parts[0] in source_dirs:
        return "/".join((alias, *parts[1:]))
    return "/".join(parts)


def add_import(source: str, names: Sequence[str], specifier: str) -> str:
    """Insert a named import after a leading ``'use client'`` directive, or at the top."""
    statement = f"import {{ {', '.join(names)} }} from '{specifier}'\n"
    match = _DIRECTIVE_RE.match(source)
    if match is None:
        return statement + source
    head = match.group(0)
    if not head.endswith("\n"):
        head += "\n"
    return head + statement + source[match.end() :]


def rewrite(
    source: str,
    matches: Sequence[ScanMatch],
    components: Sequence[SynthesizedComponent],
    specifier: str,
    *,
    path: str = "",
) -> str:
    """Rename matched elements to their components and drop the class attribute.

    Everything outside the edited spans is preserved byte for byte. Raises
    InternalConsistencyError, without returning partial text, when a
    non-blank class string has no component. *path* names the file in that
    error.
    """
    by_class = {component.class_string: component for component in components}
    edits: list[tuple[int, int, str]] = []

    for match in matches:
        class_string = match.class_string
        if not class_string.strip():
            continue
        component = by_class.get(class_string)
        if component is None:
            raise InternalConsistencyError(
                f"No synthesized component for className {class_string!r} in {path or '<source>'}",
                path=path,
                class_string=class_string,
            )
        element = match.element
        attr_start = match.attribute.start
        while attr_start > element.name_end and source[attr_start - 1].isspace():
            attr_start -= 1
        edits.append((element.name_start, element.name_end, component.name))
        edits.append((attr_start, match.attribute.end, ""))
        if element.closing_name_start is not None and element.closing_name_end is not None:
            edits.append((element.closing_name_start, element.closing_name_end, component.name))

    if not edits:
        return source

    out = source
    for start, end, text in sorted(edits, key=lambda e: e[0], reverse=True):
        out = out[:start] + text + out[end:]

    return add_import(out, [c.name for c in components], specifier)
