"""Lark Transformer that converts one JSX opening tag into a Tag record."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from lark import Lark, Transformer, v_args
from lark.exceptions import LarkError

from r3fapp.parser.errors import ParseError

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"


@dataclass(frozen=True)
class Attribute:
    """One attribute of an opening tag.

    ``start``/``end`` are absolute offsets into the scanned source and cover
    the whole attribute (name, ``=`` and value). ``value`` is the unquoted
    text for string attributes, the raw ``{...}`` text for expressions and
    spreads, and None for boolean attributes.
    """

    name: str
    kind: str  # "string", "expression", "boolean", "spread"
    value: str | None
    start: int
    end: int

    @property
    def is_literal(self) -> bool:
        return self.kind == "string"


@dataclass(frozen=True)
class Tag:
    name: str
    name_start: int
    name_end: int
    attributes: tuple[Attribute, ...]
    self_closing: bool


class _TagTransformer(Transformer):  # type: ignore[type-arg]
    """Build a Tag from the parse tree; positions are shifted by *offset*."""

    def __init__(self, text: str, offset: int) -> None:
        super().__init__()
        self._text = text
        self._offset = offset

    def _slice(self, meta: object) -> str:
        return self._text[meta.start_pos : meta.end_pos]  # type: ignore[attr-defined]

    def _attribute(self, meta: object, name: str, kind: str, value: str | None) -> Attribute:
        return Attribute(
            name=name,
            kind=kind,
            value=value,
            start=meta.start_pos + self._offset,  # type: ignore[attr-defined]
            end=meta.end_pos + self._offset,  # type: ignore[attr-defined]
        )

    @v_args(meta=True)
    def tag_name(self, meta, children) -> tuple[str, int, int]:
        return (
            self._slice(meta),
            meta.start_pos + self._offset,
            meta.end_pos + self._offset,
        )

    @v_args(meta=True)
    def attr_name(self, meta, children) -> str:
        return self._slice(meta)

    @v_args(meta=True)
    def expression(self, meta, children) -> str:
        return self._slice(meta)

    @v_args(meta=True)
    def string_attribute(self, meta, children) -> Attribute:
        name, raw = children
        return self._attribute(meta, name, "string", str(raw)[1:-1])

    @v_args(meta=True)
    def expression_attribute(self, meta, children) -> Attribute:
        name, expr = children
        return self._attribute(meta, name, "expression", expr)

    @v_args(meta=True)
    def boolean_attribute(self, meta, children) -> Attribute:
        return self._attribute(meta, children[0], "boolean", None)

    @v_args(meta=True)
    def spread_attribute(self, meta, children) -> Attribute:
        return self._attribute(meta, "", "spread", children[0])

    def self_closing(self, children) -> bool:
        return True

    def open_end(self, children) -> bool:
        return False

    def start(self, children) -> Tag:
        (name, name_start, name_end), *attributes, self_closing = children
        return Tag(
            name=name,
            name_start=name_start,
            name_end=name_end,
            attributes=tuple(attributes),
            self_closing=self_closing,
        )


@lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark(
        GRAMMAR_PATH.read_text(encoding="utf-8"),
        parser="lalr",
        start="start",
        propagate_positions=True,
    )


def parse_tag(text: str, offset: int = 0) -> Tag:
    """Parse the text of one opening tag.

    *offset* is where *text* begins in the enclosing source; it is added to
    every reported position and used for error locations.
    """
    try:
        tree = _parser().parse(text)
    except LarkError as e:
        line = getattr(e, "line", None)
        column = getattr(e, "column", None)
        raise ParseError(f"Invalid opening tag {text!r}: {e}", line=line, column=column) from e
    return _TagTransformer(text, offset).transform(tree)
