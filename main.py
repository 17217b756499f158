#!/usr/bin/env python3
"""
Utility Class to CSS Modules Converter
Main entry point for the command line tool.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

import click

from core.converter import ModuleConverter
from core.errors import ConversionError, ConversionIOError
from core.models import ConversionResult
from core.settings import ENGINE_NAMES, configure_logging, load_settings
from report.report_builder import ReportBuilder
from tailwind.config_reader import TailwindConfigReader
from tailwind.engine import create_engine

logger = logging.getLogger(__name__)


async def run_conversion(converter: ModuleConverter,
                         input_path: Path,
                         output_dir: Path,
                         generate_report: bool) -> List[ConversionResult]:
    if input_path.is_dir():
        return await converter.convert_directory(input_path, output_dir, generate_report)
    return [await converter.convert_file(input_path, output_dir, generate_report)]


def write_reports(results: List[ConversionResult], diff: bool, html_diff: bool, json_report: bool) -> None:
    builder = ReportBuilder()
    for result in results:
        report = result.change_report
        if report is None:
            continue
        if diff:
            click.echo(builder.generate_console_report(report))
        component_path = result.component_path
        if html_diff:
            html_path = component_path.with_name(f"{component_path.stem}.diff.html")
            try:
                builder.generate_html_report(report, html_path)
            except OSError as e:
                raise ConversionIOError('write report', html_path, e) from e
            click.echo(f"HTML Diff Report: {html_path}")
        if json_report:
            json_path = component_path.with_name(f"{component_path.stem}.changes.json")
            try:
                builder.generate_json_report(report, json_path)
            except OSError as e:
                raise ConversionIOError('write report', json_path, e) from e
            click.echo(f"JSON Change Report: {json_path}")


@click.command()
@click.option('-i', '--input', 'input_path', required=True,
              type=click.Path(exists=True, path_type=Path),
              help='Input component file (.tsx/.jsx) or a directory of them.')
@click.option('-o', '--output', 'output_dir', required=True,
              type=click.Path(file_okay=False, path_type=Path),
              help='Output directory for generated files.')
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose logging.')
@click.option('-d', '--diff', is_flag=True, help='Show conversion changes in the console.')
@click.option('--html-diff', is_flag=True, help='Generate an HTML diff report (implies --diff).')
@click.option('--json-report', is_flag=True, help='Write the change report as JSON.')
@click.option('--engine', type=click.Choice(ENGINE_NAMES), default=None,
              help='Atomic CSS engine: UnoCSS through Node.js, or the built-in mappings.')
@click.option('--settings', 'settings_path', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='JSON file overriding converter settings.')
@click.option('--tailwind-config', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='tailwind.config.js whose theme is passed to the engine.')
def cli(input_path: Path,
        output_dir: Path,
        verbose: bool,
        diff: bool,
        html_diff: bool,
        json_report: bool,
        engine: Optional[str],
        settings_path: Optional[Path],
        tailwind_config: Optional[Path]) -> None:
    """Convert utility-class markup into CSS Modules."""
    configure_logging(verbose)
    diff = diff or html_diff

    try:
        settings = load_settings(settings_path).override(engine=engine)
        theme = TailwindConfigReader().load_theme(tailwind_config) if tailwind_config else None
        converter = ModuleConverter(settings, create_engine(settings.engine, theme=theme))

        click.echo('Starting utility classes to CSS Modules conversion...')
        results = asyncio.run(run_conversion(converter, input_path, output_dir, diff or json_report))
        for result in results:
            click.echo(f"CSS Modules: {result.stylesheet_path}")
            click.echo(f"Updated Component: {result.component_path}")
        write_reports(results, diff, html_diff, json_report)
    except ConversionError as e:
        logger.error(f"Conversion failed: {e}", exc_info=verbose)
        click.echo(f"Conversion failed: {e}", err=True)
        sys.exit(1)

    click.echo(f"Conversion completed successfully! ({len(results)} file(s))")


if __name__ == "__main__":
    cli()
