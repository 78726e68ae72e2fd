from r3fapp.parser.errors import ParseError
from r3fapp.parser.markup import JSXElement, ScanMatch, parse_markup, scan
from r3fapp.parser.tag import Attribute, Tag, parse_tag

__all__ = [
    "ParseError",
    "Attribute",
    "Tag",
    "parse_tag",
    "JSXElement",
    "ScanMatch",
    "parse_markup",
    "scan",
]
