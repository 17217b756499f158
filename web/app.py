"""
Web Interface for Utility Class to CSS Modules Conversion
"""

import sys
import asyncio
import logging
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from flask import Flask, render_template, request, jsonify

from core.converter import ModuleConverter
from core.errors import EngineUnavailableError, ScanError
from core.settings import ENGINE_NAMES, ConverterSettings, configure_logging
from report.report_builder import ReportBuilder
from utils.file_utils import MARKUP_EXTENSIONS, is_markup_file, output_paths

logger = logging.getLogger(__name__)


def create_app(settings: ConverterSettings = None) -> Flask:
    app = Flask(__name__)
    app.config['CONVERTER_SETTINGS'] = settings or ConverterSettings()

    @app.route('/')
    def index():
        """Render the upload form."""
        return render_template('index.html', engines=ENGINE_NAMES,
                               default_engine=app.config['CONVERTER_SETTINGS'].engine)

    @app.route('/convert', methods=['POST'])
    def convert():
        """Convert an uploaded component and return the stylesheet, component and change report."""
        upload = request.files.get('component_file')
        if upload is None or not upload.filename:
            return jsonify({'error': 'A component_file upload is required'}), 400
        if not is_markup_file(upload.filename):
            return jsonify({'error': f"Unsupported file type, expected one of {', '.join(sorted(MARKUP_EXTENSIONS))}"}), 400
        engine = request.form.get('engine') or app.config['CONVERTER_SETTINGS'].engine
        if engine not in ENGINE_NAMES:
            return jsonify({'error': f"Unknown engine '{engine}'"}), 400

        settings = app.config['CONVERTER_SETTINGS'].override(engine=engine)
        try:
            content = upload.read().decode('utf-8')
        except UnicodeDecodeError:
            return jsonify({'error': 'Component file must be UTF-8 text'}), 400

        stylesheet_path, component_path = output_paths(Path(upload.filename).name, '.', settings.stylesheet_suffix)
        converter = ModuleConverter(settings)
        try:
            result = asyncio.run(converter.convert_source(content, stylesheet_path.name))
        except ScanError as e:
            return jsonify({'error': str(e)}), 422
        except EngineUnavailableError as e:
            logger.error(f"Engine unavailable: {e}")
            return jsonify({'error': str(e)}), 502

        report = converter.tracker.build_report(
            result.changes, result.nodes, result.stylesheet,
            original_file=upload.filename,
            modified_file=component_path.name,
            stylesheet_file=stylesheet_path.name,
        )
        return jsonify({
            'success': True,
            'stylesheet_name': stylesheet_path.name,
            'stylesheet': result.stylesheet,
            'component': result.component,
            'class_frequency': dict(converter.scanner.extract_classes(content)),
            'report': report.to_dict(),
            'report_html': ReportBuilder().render_html_report(report),
        })

    return app


if __name__ == '__main__':
    configure_logging()
    create_app().run(debug=True)
