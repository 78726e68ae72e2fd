from r3fapp.transforms.rewriter import add_import, import_specifier, rewrite
from r3fapp.transforms.synthesizer import (
    component_name,
    render_css,
    resolve_declarations,
    style_path_for,
    synthesize,
)

__all__ = [
    "synthesize",
    "resolve_declarations",
    "render_css",
    "component_name",
    "style_path_for",
    "rewrite",
    "add_import",
    "import_specifier",
]
