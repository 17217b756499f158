import sys
import os
import json
import subprocess
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from core.errors import ConfigError
from tailwind.config_reader import TailwindConfigReader

SAMPLE_CONFIG = {
    'content': ['./src/**/*.tsx'],
    'theme': {
        'colors': {'primary': '#000000', 'muted': '#999999'},
        'extend': {
            'colors': {'primary': '#123456', 'secondary': '#654321'},
            'spacing': {'72': '18rem'},
            'fontSize': {'xxl': '2rem'}
        }
    },
    'plugins': []
}

def test_extract_theme_merges_extend():
    theme = TailwindConfigReader().extract_theme(SAMPLE_CONFIG)
    assert theme['colors'] == {'primary': '#123456', 'muted': '#999999', 'secondary': '#654321'}
    assert theme['spacing'] == {'72': '18rem'}
    assert theme['fontSize'] == {'xxl': '2rem'}
    assert 'content' not in theme
    assert 'extend' not in theme

def test_extract_theme_missing_theme():
    reader = TailwindConfigReader()
    assert reader.extract_theme({'theme': {}}) == {}
    assert reader.extract_theme({}) == {}

def test_extract_theme_ignores_unknown_keys():
    theme = TailwindConfigReader().extract_theme({'theme': {'extend': {'animation': {'spin': 'x'}}}})
    assert theme == {}

def test_read_json_config(tmp_path):
    path = tmp_path / 'tailwind.config.json'
    path.write_text(json.dumps(SAMPLE_CONFIG), encoding='utf-8')
    assert TailwindConfigReader().read_config(path) == SAMPLE_CONFIG

def test_read_malformed_json_config(tmp_path):
    path = tmp_path / 'tailwind.config.json'
    path.write_text('{not json', encoding='utf-8')
    with pytest.raises(ConfigError):
        TailwindConfigReader().read_config(path)

def test_read_js_config_through_node(monkeypatch, tmp_path):
    path = tmp_path / 'tailwind.config.js'
    path.write_text('module.exports = {}', encoding='utf-8')
    calls = []

    def fake_run(command, **kwargs):
        calls.append(command)
        return subprocess.CompletedProcess(command, 0, stdout=json.dumps(SAMPLE_CONFIG) + '\n', stderr='')

    monkeypatch.setattr(subprocess, 'run', fake_run)
    theme = TailwindConfigReader().load_theme(path)
    assert theme['spacing'] == {'72': '18rem'}
    assert calls[0][:2] == ['node', '-e']
    assert str(path.resolve()) in calls[0][2]

def test_read_js_config_node_failure(monkeypatch, tmp_path):
    def fake_run(command, **kwargs):
        raise subprocess.CalledProcessError(1, command, output='', stderr='SyntaxError: Unexpected token')

    monkeypatch.setattr(subprocess, 'run', fake_run)
    with pytest.raises(ConfigError, match='SyntaxError'):
        TailwindConfigReader().read_config(tmp_path / 'tailwind.config.js')

def test_read_js_config_node_missing(monkeypatch, tmp_path):
    def fake_run(command, **kwargs):
        raise FileNotFoundError('node')

    monkeypatch.setattr(subprocess, 'run', fake_run)
    with pytest.raises(ConfigError):
        TailwindConfigReader().read_config(tmp_path / 'tailwind.config.js')
