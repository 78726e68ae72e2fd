"""Migration pipeline: tailwind class names -> styled-components.

Stages run strictly in order and never re-enter:

    extract style table -> enumerate target files
        -> (scan -> synthesize -> rewrite) per file
        -> write companion style files -> replace global sheet

The style compiler runs before any file is touched, so a CompileError leaves
the project as it was. Later failures are not rolled back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from r3fapp.config import MigrationConfig
from r3fapp.engine.formatter import Formatter, NullFormatter
from r3fapp.errors import CompileError
from r3fapp.model.component import ComponentCollection, ScannedElement
from r3fapp.model.style import StyleTable
from r3fapp.parser.markup import scan
from r3fapp.stylesheet.compiler import StyleCompiler, TailwindCompiler
from r3fapp.stylesheet.extractor import StyleTableExtractor
from r3fapp.transforms.rewriter import import_specifier, rewrite
from r3fapp.transforms.synthesizer import style_path_for, synthesize

logger = logging.getLogger(__name__)


@dataclass
class MigrationResult:
    """What a migration run wrote, as project-relative paths."""

    rewritten: list[str] = field(default_factory=list)
    style_files: list[str] = field(default_factory=list)
    elements: list[ScannedElement] = field(default_factory=list)
    components: ComponentCollection = field(default_factory=ComponentCollection)


class MigrationPipeline:
    """Drives one migration over a project rooted at *root*."""

    def __init__(
        self,
        root: Path,
        config: MigrationConfig | None = None,
        compiler: StyleCompiler | None = None,
        formatter: Formatter | None = None,
    ) -> None:
        self.root = Path(root)
        self.config = config or MigrationConfig()
        self.extractor = StyleTableExtractor(
            compiler or TailwindCompiler(self.config.tailwind_config),
            base_layer=self.config.base_layer,
        )
        self.formatter = formatter or NullFormatter()

    # ---- stages ------------------------------------------------------------

    def extract_style_table(self) -> tuple[StyleTable, str]:
        try:
            source = (self.root / self.config.global_sheet).read_text(encoding="utf-8")
        except OSError as exc:
            raise CompileError(
                f"Cannot read global style sheet {self.config.global_sheet}: {exc}", cause=exc
            ) from exc
        table = self.extractor.compile(source, self.root)
        base_css = self.extractor.compile_base(self.root)
        logger.info("compiled %s: %d class names", self.config.global_sheet, len(table))
        return table, base_css

    def enumerate_target_files(self) -> list[str]:
        """Depth-first listing of each source dir, files before subdirectories."""
        files: list[str] = []
        for source_dir in self.config.source_dirs:
            self._list_files(source_dir, files)
        return [
            f
            for f in files
            if Path(f).suffix == self.config.extension
            and Path(f).stem in self.config.target_names
        ]

    def _list_files(self, rel_dir: str, files: list[str]) -> None:
        directory = self.root / rel_dir
        if not directory.is_dir():
            return
        subdirs: list[str] = []
        for child in sorted(directory.iterdir()):
            rel = f"{rel_dir}/{child.name}"
            if child.is_dir():
                subdirs.append(rel)
            elif child.is_file():
                files.append(rel)
        for sub in subdirs:
            self._list_files(sub, files)

    def migrate_file(
        self, rel_path: str, table: StyleTable, collection: ComponentCollection
    ) -> list[ScannedElement]:
        """Scan, synthesize and rewrite one file in place."""
        cfg = self.config
        file_path = self.root / rel_path
        source = file_path.read_text(encoding="utf-8")

        matches = scan(source, cfg.class_attribute)
        elements = synthesize(
            matches,
            table,
            rel_path,
            collection,
            name_suffix=cfg.name_suffix,
            style_suffix=cfg.style_suffix,
        )
        specifier = import_specifier(
            style_path_for(rel_path, cfg.style_suffix), cfg.source_dirs, cfg.import_alias
        )
        new_source = rewrite(
            source, matches, collection.for_file(rel_path), specifier, path=rel_path
        )
        file_path.write_text(self.formatter.format(new_source, rel_path), encoding="utf-8")
        logger.info("rewrote %s (%d elements)", rel_path, len(elements))
        return elements

    def write_style_files(self, collection: ComponentCollection) -> list[str]:
        """Write one companion file per style path.

        The file is re-formatted and re-written after every component so each
        intermediate state is valid source on its own.
        """
        written: list[str] = []
        header = "'use client'\n" if self.config.use_client else ""
        header += "import styled from 'styled-components'\n\n"
        for style_path, components in collection.by_style_path().items():
            target = self.root / style_path
            text = header
            for component in components:
                text += f"\n{component.body}"
                target.write_text(self.formatter.format(text, style_path), encoding="utf-8")
            written.append(style_path)
            logger.info("wrote %s (%d components)", style_path, len(components))
        return written

    def replace_global_sheet(self, base_css: str) -> None:
        (self.root / self.config.global_sheet).write_text(base_css, encoding="utf-8")

    # ---- driver --------------------------------------------------------------

    def run(self) -> MigrationResult:
        table, base_css = self.extract_style_table()
        result = MigrationResult()
        for rel_path in self.enumerate_target_files():
            result.elements.extend(self.migrate_file(rel_path, table, result.components))
            result.rewritten.append(rel_path)
        result.style_files = self.write_style_files(result.components)
        self.replace_global_sheet(base_css)
        return result


def migrate(
    root: Path,
    config: MigrationConfig | None = None,
    compiler: StyleCompiler | None = None,
    formatter: Formatter | None = None,
) -> MigrationResult:
    """Run a full migration of the project at *root*."""
    return MigrationPipeline(root, config, compiler=compiler, formatter=formatter).run()
