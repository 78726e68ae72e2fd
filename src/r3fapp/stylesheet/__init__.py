from r3fapp.stylesheet.compiler import StyleCompiler, TailwindCompiler
from r3fapp.stylesheet.extractor import (
    StyleTableExtractor,
    extract_style_table,
    parse_class_selector,
)

__all__ = [
    "StyleCompiler",
    "TailwindCompiler",
    "StyleTableExtractor",
    "extract_style_table",
    "parse_class_selector",
]
