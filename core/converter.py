"""
Module Converter
Coordinates scanning, naming, CSS resolution, stylesheet assembly and markup rewriting.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from tailwind.engine import AtomicCSSEngine, create_engine
from report.change_tracker import ChangeTracker
from utils.file_utils import (
    MARKUP_EXTENSIONS,
    ensure_directory,
    get_all_files_by_extension,
    output_paths,
    read_file_content,
    write_file_atomic,
)
from .css_resolver import CSSResolver
from .errors import ConversionIOError, ScanError
from .markup_rewriter import MarkupRewriter
from .markup_scanner import MarkupScanner
from .models import ConversionResult, ElementNode
from .semantic_namer import SemanticNamer
from .settings import ConverterSettings
from .stylesheet_assembler import StylesheetAssembler

logger = logging.getLogger(__name__)


class ModuleConverter:
    """
    One converter may run many conversions; every run builds its own node and
    rule lists. The only state shared between runs is the resolver's
    engine-ready flag.
    """

    def __init__(self,
                 settings: Optional[ConverterSettings] = None,
                 engine: Optional[AtomicCSSEngine] = None):
        self.settings = settings or ConverterSettings()
        self.engine = engine or create_engine(self.settings.engine)
        self.scanner = MarkupScanner(self.settings.class_attributes)
        self.namer = SemanticNamer(self.settings.plain_prefix, self.settings.disambiguate_components)
        self.resolver = CSSResolver(self.engine, self.settings.default_layer)
        self.assembler = StylesheetAssembler(self.settings.header_comment)
        self.rewriter = MarkupRewriter(self.settings.style_token, self.settings.class_attributes)
        self.tracker = ChangeTracker()

    def parse(self, content: str) -> List[ElementNode]:
        """Scan and name; no class-bearing tag at all is fatal."""
        tags = self.scanner.scan(content)
        if not tags:
            raise ScanError('No JSX nodes with class attributes found')
        return self.namer.assign(tags)

    async def convert_source(self, content: str, stylesheet_name: str) -> ConversionResult:
        """Run the whole pipeline on in-memory text; nothing is written."""
        logger.info("Parsing JSX nodes...")
        nodes = self.parse(content)
        logger.info(f"Found {len(nodes)} nodes with classes")

        logger.info(f"Generating CSS with the {self.engine.name} engine...")
        rules = await self.resolver.resolve_all(nodes)
        stylesheet = self.assembler.assemble(rules)

        rewrite = self.rewriter.rewrite(content, nodes, stylesheet_name)
        return ConversionResult(
            stylesheet=stylesheet,
            component=rewrite.text,
            nodes=nodes,
            rules=rules,
            changes=rewrite.changes,
        )

    async def convert_file(self,
                           input_path: Union[str, Path],
                           output_dir: Union[str, Path],
                           generate_report: bool = False) -> ConversionResult:
        """Convert one component file and write the stylesheet and rewritten component."""
        input_path = Path(input_path)
        output_dir = Path(output_dir)
        stylesheet_path, component_path = output_paths(input_path, output_dir, self.settings.stylesheet_suffix)

        try:
            content = read_file_content(input_path)
        except (OSError, UnicodeDecodeError) as e:
            raise ConversionIOError('read input', input_path, e) from e

        result = await self.convert_source(content, stylesheet_path.name)

        try:
            ensure_directory(output_dir)
        except OSError as e:
            raise ConversionIOError('create output directory', output_dir, e) from e
        try:
            write_file_atomic(stylesheet_path, result.stylesheet)
        except OSError as e:
            raise ConversionIOError('write stylesheet', stylesheet_path, e) from e
        try:
            write_file_atomic(component_path, result.component)
        except OSError as e:
            raise ConversionIOError('write component', component_path, e) from e
        logger.info(f"Wrote {stylesheet_path} and {component_path}")

        result.stylesheet_path = stylesheet_path
        result.component_path = component_path
        if generate_report:
            result.change_report = self.tracker.build_report(
                result.changes, result.nodes, result.stylesheet,
                original_file=input_path,
                modified_file=component_path,
                stylesheet_file=stylesheet_path,
            )
        return result

    async def convert_directory(self,
                                input_dir: Union[str, Path],
                                output_dir: Union[str, Path],
                                generate_report: bool = False) -> List[ConversionResult]:
        """
        Convert every markup file below input_dir, mirroring its layout under
        output_dir. Files without class attributes are skipped, not fatal.
        """
        input_dir = Path(input_dir)
        results = []
        for path in get_all_files_by_extension(input_dir, sorted(MARKUP_EXTENSIONS)):
            relative_dir = path.parent.relative_to(input_dir.resolve())
            try:
                results.append(await self.convert_file(path, Path(output_dir) / relative_dir, generate_report))
            except ScanError:
                logger.warning(f"Skipping {path}: no class attributes found")
        return results
