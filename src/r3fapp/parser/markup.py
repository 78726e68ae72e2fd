"""Hand-written scanner that locates JSX elements inside JavaScript source.

JavaScript is skipped token-wise (strings, template literals, comments and
brace nesting) until a ``<`` appears in a position where an expression may
start. From there the element is read in JSX mode: the opening tag is handed
to the tag grammar, children are walked recursively and the closing tag is
matched against the opening one.

Syntax handled:
    <div className="a b" {...props}>text {expr} <Child /></div>
    <>fragments</>
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from r3fapp.parser.errors import ParseError
from r3fapp.parser.tag import Attribute, parse_tag

__all__ = ["JSXElement", "ScanMatch", "parse_markup", "scan"]

_IDENT_CHAR_RE = re.compile(r"[\w$]")
_TAG_START_RE = re.compile(r"[A-Za-z_$>]")

# Keywords after which "<" or "/" begins an expression rather than an operator.
_EXPRESSION_KEYWORDS = {
    "return", "yield", "await", "default", "case", "else", "do", "typeof", "void",
    "in", "of", "instanceof", "new", "delete", "throw",
}


@dataclass(frozen=True)
class JSXElement:
    """A JSX element with absolute source offsets.

    ``closing_name_start``/``closing_name_end`` locate the tag name in the
    closing tag and are None for self-closing elements.
    """

    tag: str
    start: int
    end: int
    name_start: int
    name_end: int
    attributes: tuple[Attribute, ...]
    self_closing: bool
    closing_name_start: int | None = None
    closing_name_end: int | None = None

    def attribute(self, name: str) -> Attribute | None:
        for attr in self.attributes:
            if attr.name == name:
                return attr
        return None


@dataclass(frozen=True)
class ScanMatch:
    """An element paired with its literal style-class attribute."""

    element: JSXElement
    attribute: Attribute

    @property
    def class_string(self) -> str:
        return self.attribute.value or ""


def _location(source: str, pos: int) -> tuple[int, int]:
    line = source.count("\n", 0, pos) + 1
    column = pos - (source.rfind("\n", 0, pos) + 1) + 1
    return line, column


class _Scanner:
    def __init__(self, source: str) -> None:
        self.src = source
        self.pos = 0
        self.elements: list[JSXElement] = []

    def error(self, message: str, pos: int | None = None) -> ParseError:
        line, column = _location(self.src, self.pos if pos is None else pos)
        return ParseError(message, line=line, column=column)

    # ---- JavaScript mode ----

    def scan_js(self, until_brace: bool = False) -> None:
        """Skip JavaScript, collecting elements; stop after an unmatched ``}``."""
        src = self.src
        depth = 0
        start = self.pos
        while self.pos < len(src):
            c = src[self.pos]
            if c in "'\"":
                self.skip_string(c)
            elif c == "`":
                self.skip_template()
            elif src.startswith("//", self.pos):
                end = src.find("\n", self.pos)
                self.pos = len(src) if end == -1 else end
            elif src.startswith("/*", self.pos):
                end = src.find("*/", self.pos + 2)
                if end == -1:
                    raise self.error("Unterminated comment")
                self.pos = end + 2
            elif c == "{":
                depth += 1
                self.pos += 1
            elif c == "}":
                self.pos += 1
                if depth == 0 and until_brace:
                    return
                depth -= 1
            elif c == "/" and self.is_regex_start():
                self.skip_regex()
            elif c == "<" and self.is_tag_start():
                self.parse_element()
            else:
                self.pos += 1
        if until_brace:
            raise self.error("Unterminated expression", start)

    def skip_string(self, quote: str) -> None:
        start = self.pos
        self.pos += 1
        while self.pos < len(self.src):
            c = self.src[self.pos]
            if c == "\\":
                self.pos += 2
                continue
            self.pos += 1
            if c == quote:
                return
            if c == "\n":
                break
        raise self.error("Unterminated string", start)

    def skip_template(self) -> None:
        start = self.pos
        self.pos += 1
        while self.pos < len(self.src):
            c = self.src[self.pos]
            if c == "\\":
                self.pos += 2
            elif c == "`":
                self.pos += 1
                return
            elif self.src.startswith("${", self.pos):
                self.pos += 2
                self.scan_js(until_brace=True)
            else:
                self.pos += 1
        raise self.error("Unterminated template literal", start)

    def skip_regex(self) -> None:
        start = self.pos
        self.pos += 1
        in_class = False
        while self.pos < len(self.src):
            c = self.src[self.pos]
            if c == "\\":
                self.pos += 2
                continue
            if c == "\n":
                break
            self.pos += 1
            if c == "[":
                in_class = True
            elif c == "]":
                in_class = False
            elif c == "/" and not in_class:
                while self.pos < len(self.src) and _IDENT_CHAR_RE.match(self.src[self.pos]):
                    self.pos += 1
                return
        raise self.error("Unterminated regular expression", start)

    def is_regex_start(self) -> bool:
        prev = self.previous_char()
        if prev in ("}", "'", '"', "`"):
            return False
        return self.follows_operator()

    def is_tag_start(self) -> bool:
        nxt = self.src[self.pos + 1 : self.pos + 2]
        if not _TAG_START_RE.match(nxt):
            return False
        return self.follows_operator()

    def previous_char(self) -> str:
        i = self.pos - 1
        while i >= 0 and self.src[i].isspace():
            i -= 1
        return self.src[i] if i >= 0 else ""

    def follows_operator(self) -> bool:
        """True when an expression may start at the cursor."""
        i = self.pos - 1
        while i >= 0 and self.src[i].isspace():
            i -= 1
        if i < 0:
            return True
        prev = self.src[i]
        if prev in ")]":
            return False
        if _IDENT_CHAR_RE.match(prev):
            j = i
            while j >= 0 and _IDENT_CHAR_RE.match(self.src[j]):
                j -= 1
            return self.src[j + 1 : i + 1] in _EXPRESSION_KEYWORDS
        return True

    # ---- JSX mode ----

    def parse_element(self) -> None:
        start = self.pos
        if self.src.startswith("<>", start):
            self.pos += 2
            self.parse_children("")
            return

        tag_end = self.find_tag_end()
        try:
            tag = parse_tag(self.src[start:tag_end], offset=start)
        except ParseError as exc:
            raise self.error(exc.message, start) from exc
        self.pos = tag_end

        if tag.self_closing:
            self.elements.append(
                JSXElement(
                    tag=tag.name,
                    start=start,
                    end=tag_end,
                    name_start=tag.name_start,
                    name_end=tag.name_end,
                    attributes=tag.attributes,
                    self_closing=True,
                )
            )
            return

        closing_start, closing_end = self.parse_children(tag.name)
        self.elements.append(
            JSXElement(
                tag=tag.name,
                start=start,
                end=self.pos,
                name_start=tag.name_start,
                name_end=tag.name_end,
                attributes=tag.attributes,
                self_closing=False,
                closing_name_start=closing_start,
                closing_name_end=closing_end,
            )
        )

    def find_tag_end(self) -> int:
        """Return the offset just past the ``>`` closing the current opening tag."""
        start = self.pos
        self.pos += 1
        while self.pos < len(self.src):
            c = self.src[self.pos]
            if c in "'\"":
                end = self.src.find(c, self.pos + 1)
                if end == -1:
                    break
                self.pos = end + 1
            elif c == "{":
                self.pos += 1
                self.scan_js(until_brace=True)
            elif c == ">":
                end = self.pos + 1
                self.pos = start
                return end
            else:
                self.pos += 1
        raise self.error("Unterminated opening tag", start)

    def parse_children(self, tag: str) -> tuple[int, int]:
        """Walk children up to the matching closing tag; return its name span."""
        start = self.pos
        while self.pos < len(self.src):
            c = self.src[self.pos]
            if c == "{":
                self.pos += 1
                self.scan_js(until_brace=True)
            elif self.src.startswith("</", self.pos):
                close = self.src.find(">", self.pos)
                if close == -1:
                    break
                raw = self.src[self.pos + 2 : close]
                name = raw.strip()
                if name != tag:
                    raise self.error(
                        f"Expected closing tag for <{tag}>, found </{name}>", self.pos
                    )
                name_start = self.pos + 2 + (len(raw) - len(raw.lstrip()))
                self.pos = close + 1
                return name_start, name_start + len(name)
            elif c == "<":
                self.parse_element()
            else:
                self.pos += 1
        raise self.error(f"Unterminated element <{tag}>", start)


def parse_markup(source: str) -> list[JSXElement]:
    """Return every JSX element in *source*, ordered by opening-tag position."""
    scanner = _Scanner(source)
    scanner.scan_js()
    return sorted(scanner.elements, key=lambda el: el.start)


def scan(source: str, attribute: str = "className") -> list[ScanMatch]:
    """Pair each element with its *attribute*, in document order.

    Only string-literal values are reported; ``className={...}`` is skipped.
    """
    matches: list[ScanMatch] = []
    for element in parse_markup(source):
        attr = element.attribute(attribute)
        if attr is not None and attr.is_literal:
            matches.append(ScanMatch(element=element, attribute=attr))
    return matches
