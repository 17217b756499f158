import sys
import os
import json
import asyncio
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from core.errors import EngineError, EngineUnavailableError
from tailwind import uno_engine
from tailwind.uno_engine import UnoCSSEngine

UNO_CSS = "/* layer: preflights */\n*{box-sizing:border-box;}\n/* layer: default */\n.flex{display:flex;}"


class FakeProcess:
    def __init__(self, stdout=b'', stderr=b'', returncode=0):
        self.stdout_data = stdout
        self.stderr_data = stderr
        self.returncode = returncode
        self.received = None

    async def communicate(self, data):
        self.received = data
        return self.stdout_data, self.stderr_data


def fake_exec(process, calls):
    async def create_subprocess_exec(*args, **kwargs):
        calls.append((args, kwargs))
        return process
    return create_subprocess_exec

def test_generate_sends_tokens_and_theme(monkeypatch):
    process = FakeProcess(stdout=json.dumps({'css': UNO_CSS, 'matched': ['flex']}).encode('utf-8'))
    calls = []
    monkeypatch.setattr(asyncio, 'create_subprocess_exec', fake_exec(process, calls))
    engine = UnoCSSEngine(theme={'colors': {'primary': '#123456'}}, working_dir='/tmp/project')
    result = asyncio.run(engine.generate({'flex', 'bogus'}))
    assert result.layer('default') == '.flex{display:flex;}'
    assert result.matched == frozenset({'flex'})
    args, kwargs = calls[0]
    assert args[:3] == ('node', '--input-type=module', '-e')
    assert kwargs['cwd'] == '/tmp/project'
    assert json.loads(process.received) == {'tokens': ['bogus', 'flex'], 'theme': {'colors': {'primary': '#123456'}}}

def test_generate_nonzero_exit_raises_engine_error(monkeypatch):
    process = FakeProcess(stderr=b'TypeError: boom', returncode=1)
    monkeypatch.setattr(asyncio, 'create_subprocess_exec', fake_exec(process, []))
    with pytest.raises(EngineError, match='boom'):
        asyncio.run(UnoCSSEngine().generate({'flex'}))

def test_generate_malformed_output(monkeypatch):
    monkeypatch.setattr(asyncio, 'create_subprocess_exec', fake_exec(FakeProcess(stdout=b'not json'), []))
    with pytest.raises(EngineError, match='malformed'):
        asyncio.run(UnoCSSEngine().generate({'flex'}))

def test_setup_without_node(monkeypatch):
    monkeypatch.setattr(uno_engine.shutil, 'which', lambda binary: None)
    with pytest.raises(EngineUnavailableError, match='Node.js'):
        asyncio.run(UnoCSSEngine().setup())

def test_setup_without_unocss_packages(monkeypatch):
    monkeypatch.setattr(uno_engine.shutil, 'which', lambda binary: '/usr/bin/node')
    process = FakeProcess(stderr=b"Cannot find package '@unocss/core'", returncode=1)
    monkeypatch.setattr(asyncio, 'create_subprocess_exec', fake_exec(process, []))
    with pytest.raises(EngineUnavailableError, match='npm install'):
        asyncio.run(UnoCSSEngine().setup())

def test_setup_succeeds(monkeypatch):
    monkeypatch.setattr(uno_engine.shutil, 'which', lambda binary: '/usr/bin/node')
    calls = []
    monkeypatch.setattr(asyncio, 'create_subprocess_exec', fake_exec(FakeProcess(stdout=b'function'), calls))
    asyncio.run(UnoCSSEngine().setup())
    assert len(calls) == 1

def test_unstartable_binary(monkeypatch):
    async def broken_exec(*args, **kwargs):
        raise FileNotFoundError('no such file: node')

    monkeypatch.setattr(asyncio, 'create_subprocess_exec', broken_exec)
    with pytest.raises(EngineUnavailableError):
        asyncio.run(UnoCSSEngine().generate({'flex'}))
