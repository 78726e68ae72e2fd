"""Build a StyleTable from compiled CSS.

Only selectors of the shape ``.class`` optionally followed by pseudo-classes
are recorded. Rules nested in ``@media`` blocks carry the media header as
their outermost context. Anything with a combinator is ignored.

Declaration values are kept as their serialized source tokens, so values the
CSS object model cannot type (``rgb(0 0 0 / var(--x))``, ``var(--a, b)``)
come through unchanged.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

import tinycss2

from r3fapp.errors import CompileError
from r3fapp.model.style import ClassNameInfo, StyleTable
from r3fapp.stylesheet.compiler import StyleCompiler

__all__ = ["extract_style_table", "parse_class_selector", "StyleTableExtractor"]

logger = logging.getLogger(__name__)

_CLASS_SELECTOR_RE = re.compile(
    r"""
    ^\.
    (?P<name>(?:\\[0-9a-fA-F]{1,6}\s?|\\.|[\w-])+)      # escaped class name
    (?P<pseudo>(?::{1,2}[\w-]+(?:\([^)]*\))?)*)          # trailing pseudo-classes
    $
    """,
    re.VERBOSE,
)

_ESCAPE_RE = re.compile(r"\\(?:([0-9a-fA-F]{1,6})\s?|(.))")


def _unescape(raw: str) -> str:
    def _sub(match: re.Match[str]) -> str:
        if match.group(1):
            return chr(int(match.group(1), 16))
        return match.group(2)

    return _ESCAPE_RE.sub(_sub, raw)


def parse_class_selector(selector: str) -> tuple[str, str] | None:
    """Split ``.hover\\:bg-red:hover`` into ``("hover:bg-red", ":hover")``.

    Returns None for anything that is not a single class selector.
    """
    match = _CLASS_SELECTOR_RE.match(selector.strip())
    if match is None:
        return None
    return _unescape(match.group("name")), match.group("pseudo")


def _check(node: Any) -> None:
    if node.type == "error":
        raise CompileError(
            f"Malformed compiled CSS at line {node.source_line}, "
            f"column {node.source_column}: {node.message}"
        )


def _selectors(prelude: list[Any]) -> list[str]:
    """Split a rule prelude on its top-level commas."""
    groups: list[list[Any]] = [[]]
    for token in prelude:
        if token.type == "literal" and token.value == ",":
            groups.append([])
        else:
            groups[-1].append(token)
    return [tinycss2.serialize(group).strip() for group in groups]


def _declarations(content: list[Any]) -> dict[str, str]:
    decls: dict[str, str] = {}
    for node in tinycss2.parse_declaration_list(content, skip_comments=True, skip_whitespace=True):
        _check(node)
        if node.type != "declaration":
            continue
        value = tinycss2.serialize(node.value).strip()
        if node.important:
            value = f"{value} !important"
        decls[node.name] = value
    return decls


def _walk(rules: list[Any], wrappers: tuple[str, ...], table: StyleTable, counter: list[int]) -> None:
    for rule in rules:
        _check(rule)
        if rule.type == "at-rule":
            if rule.lower_at_keyword == "media" and rule.content is not None:
                header = f"@media {tinycss2.serialize(rule.prelude).strip()}"
                nested = tinycss2.parse_rule_list(
                    rule.content, skip_comments=True, skip_whitespace=True
                )
                _walk(nested, wrappers + (header,), table, counter)
            continue
        if rule.type != "qualified-rule":
            continue
        counter[0] += 1
        decls = _declarations(rule.content)
        if not decls:
            continue
        for text in _selectors(rule.prelude):
            parsed = parse_class_selector(text)
            if parsed is None:
                continue
            name, pseudo = parsed
            context = wrappers + ((f"&{pseudo}",) if pseudo else ())
            info: dict[str, Any] = {
                "__rule": text,
                "__source": counter[0],
                "__pseudo": pseudo,
                "__scope": " ".join(wrappers),
                "__context": context,
            }
            info.update(decls)
            table.add(ClassNameInfo.from_info(name, info))


def extract_style_table(css: str) -> StyleTable:
    """Parse compiled *css* and index every class rule by class name.

    Raises CompileError when the sheet has a syntax error.
    """
    rules = tinycss2.parse_stylesheet(css, skip_comments=True, skip_whitespace=True)
    table = StyleTable()
    _walk(rules, (), table, [0])
    logger.debug("style table: %d class names", len(table))
    return table


class StyleTableExtractor:
    """Compile a style sheet with a pluggable compiler and index the result."""

    def __init__(self, compiler: StyleCompiler, base_layer: str = "@tailwind base;") -> None:
        self._compiler = compiler
        self._base_layer = base_layer

    def compile(self, source: str, project_root: Path) -> StyleTable:
        css = self._compiler.compile(source, project_root)
        return extract_style_table(css)

    def compile_base(self, project_root: Path) -> str:
        """Compile only the unconditional base layer, for the replacement global sheet."""
        return self._compiler.compile(self._base_layer, project_root)
