"""
Report Builder Module
Renders conversion change reports for the console, as HTML and as JSON using Jinja2 templates.
"""

import json
import logging
from pathlib import Path
from typing import Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from core.models import IMPORT_SEMANTIC_NAME, ChangeReport

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / 'templates'


class ReportBuilder:
    def __init__(self, template_dir: Union[str, Path] = TEMPLATE_DIR):
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=select_autoescape(['html']),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.globals['import_name'] = IMPORT_SEMANTIC_NAME

    def generate_console_report(self, report: ChangeReport) -> str:
        return self.env.get_template('console_report.txt').render(report=report)

    def render_html_report(self, report: ChangeReport) -> str:
        return self.env.get_template('diff_report.html').render(report=report)

    def generate_html_report(self, report: ChangeReport, output_path: Union[str, Path]) -> Path:
        """Write the HTML diff view to output_path."""
        output_path = Path(output_path)
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(self.render_html_report(report))
        logger.info(f"HTML diff report written to {output_path}")
        return output_path

    def generate_json_report(self, report: ChangeReport, output_path: Union[str, Path]) -> Path:
        """Write the raw change data as JSON."""
        output_path = Path(output_path)
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(report.to_dict(), f, indent=2)
        logger.info(f"JSON change report written to {output_path}")
        return output_path
