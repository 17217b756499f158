import sys
import os
import json
import pytest
from click.testing import CliRunner
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from main import cli

COMPONENT = """import { component$ } from '@builder.io/qwik';

export const Card = component$(() => (
  <div className="flex items-center">
    <Checkbox.Indicator class="p-4" />
  </div>
));
"""


@pytest.fixture
def component_file(tmp_path):
    path = tmp_path / 'Card.tsx'
    path.write_text(COMPONENT, encoding='utf-8')
    return path

def test_missing_required_options():
    runner = CliRunner()
    assert runner.invoke(cli, []).exit_code == 2
    assert runner.invoke(cli, ['-o', 'out']).exit_code == 2

def test_missing_input_file(tmp_path):
    result = CliRunner().invoke(cli, ['-i', str(tmp_path / 'nope.tsx'), '-o', str(tmp_path / 'out')])
    assert result.exit_code == 2

def test_convert_with_mapping_engine(component_file, tmp_path):
    out = tmp_path / 'out'
    result = CliRunner().invoke(cli, ['-i', str(component_file), '-o', str(out), '--engine', 'mapping'])
    assert result.exit_code == 0, result.output
    assert 'Conversion completed successfully!' in result.output
    assert f"CSS Modules: {out / 'Card.module.css'}" in result.output
    stylesheet = (out / 'Card.module.css').read_text(encoding='utf-8')
    assert '.node0 {\n  display: flex;\n  align-items: center;\n}' in stylesheet
    assert '.indicator {\n  padding: 1rem;\n}' in stylesheet
    component = (out / 'Card.tsx').read_text(encoding='utf-8')
    assert "import styles from './Card.module.css';" in component
    assert 'className={styles.indicator}' in component

def test_diff_reports(component_file, tmp_path):
    out = tmp_path / 'out'
    result = CliRunner().invoke(cli, ['-i', str(component_file), '-o', str(out),
                                      '--engine', 'mapping', '--html-diff', '--json-report'])
    assert result.exit_code == 0, result.output
    # --html-diff implies the console diff
    assert 'Conversion Summary:' in result.output
    assert (out / 'Card.diff.html').exists()
    data = json.loads((out / 'Card.changes.json').read_text(encoding='utf-8'))
    assert data['summary']['classes_converted'] == 2

def test_no_class_attributes_fails(tmp_path):
    source = tmp_path / 'Plain.tsx'
    source.write_text('<div>plain</div>', encoding='utf-8')
    out = tmp_path / 'out'
    result = CliRunner().invoke(cli, ['-i', str(source), '-o', str(out), '--engine', 'mapping'])
    assert result.exit_code == 1
    assert 'Conversion failed: No JSX nodes with class attributes found' in result.output
    assert not out.exists()

def test_settings_file_and_tailwind_config(component_file, tmp_path):
    settings = tmp_path / 'settings.json'
    settings.write_text(json.dumps({'engine': 'mapping', 'style_token': 'css'}), encoding='utf-8')
    config = tmp_path / 'tailwind.config.json'
    config.write_text(json.dumps({'theme': {'extend': {'spacing': {'4': '2rem'}}}}), encoding='utf-8')
    out = tmp_path / 'out'
    result = CliRunner().invoke(cli, ['-i', str(component_file), '-o', str(out),
                                      '--settings', str(settings), '--tailwind-config', str(config)])
    assert result.exit_code == 0, result.output
    assert 'className={css.indicator}' in (out / 'Card.tsx').read_text(encoding='utf-8')
    assert 'padding: 2rem;' in (out / 'Card.module.css').read_text(encoding='utf-8')

def test_invalid_settings_file(component_file, tmp_path):
    settings = tmp_path / 'settings.json'
    settings.write_text(json.dumps({'colour': 'blue'}), encoding='utf-8')
    result = CliRunner().invoke(cli, ['-i', str(component_file), '-o', str(tmp_path / 'out'),
                                      '--settings', str(settings)])
    assert result.exit_code == 1
    assert 'Unknown settings: colour' in result.output

def test_directory_input(tmp_path):
    src = tmp_path / 'src'
    (src / 'nested').mkdir(parents=True)
    (src / 'Card.tsx').write_text(COMPONENT, encoding='utf-8')
    (src / 'nested' / 'Badge.jsx').write_text('<span className="p-2">b</span>', encoding='utf-8')
    out = tmp_path / 'out'
    result = CliRunner().invoke(cli, ['-i', str(src), '-o', str(out), '--engine', 'mapping'])
    assert result.exit_code == 0, result.output
    assert (out / 'Card.module.css').exists()
    assert (out / 'nested' / 'Badge.module.css').exists()
    assert '(2 file(s))' in result.output

def test_non_utf8_input_reports_failure(tmp_path):
    source = tmp_path / 'Broken.tsx'
    source.write_bytes(b'<div className="flex">\xff\xfe</div>')
    result = CliRunner().invoke(cli, ['-i', str(source), '-o', str(tmp_path / 'out'), '--engine', 'mapping'])
    assert result.exit_code == 1
    assert 'Conversion failed: Failed to read input' in result.output
