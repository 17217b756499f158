"""
UnoCSS Engine
Generates utility CSS by running UnoCSS (@unocss/core + @unocss/preset-wind) under Node.js.
"""

import asyncio
import json
import logging
import shutil
from pathlib import Path
from typing import Any, Dict, Optional, Set, Union

from core.errors import EngineError, EngineUnavailableError
from core.models import LayeredCSS
from .engine import AtomicCSSEngine

logger = logging.getLogger(__name__)

SETUP_SCRIPT = """
const core = await import('@unocss/core');
await import('@unocss/preset-wind');
process.stdout.write(typeof core.createGenerator);
"""

GENERATE_SCRIPT = """
const chunks = [];
for await (const chunk of process.stdin) chunks.push(chunk);
const request = JSON.parse(Buffer.concat(chunks).toString('utf-8'));
const { createGenerator } = await import('@unocss/core');
const wind = await import('@unocss/preset-wind');
const presetWind = wind.default ?? wind.presetWind;
const generator = await createGenerator({ presets: [presetWind()], theme: request.theme });
const result = await generator.generate(new Set(request.tokens));
process.stdout.write(JSON.stringify({ css: result.css, matched: [...result.matched] }));
"""


class UnoCSSEngine(AtomicCSSEngine):
    """
    Each `generate` call spawns one Node process; `working_dir` must be able
    to resolve the UnoCSS packages (i.e. contain or inherit a node_modules).
    """

    name = 'uno'

    def __init__(self,
                 theme: Optional[Dict[str, Any]] = None,
                 node_binary: str = 'node',
                 working_dir: Union[str, Path, None] = None):
        self.theme = theme or {}
        self.node_binary = node_binary
        self.working_dir = str(working_dir) if working_dir else None

    async def _run_node(self, script: str, payload: Optional[Dict[str, Any]] = None) -> str:
        stdin_data = json.dumps(payload).encode('utf-8') if payload is not None else b''
        try:
            process = await asyncio.create_subprocess_exec(
                self.node_binary, '--input-type=module', '-e', script,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=self.working_dir,
            )
        except OSError as e:
            raise EngineUnavailableError(f"Cannot start {self.node_binary}: {e}") from e
        stdout, stderr = await process.communicate(stdin_data)
        if process.returncode != 0:
            raise EngineError(f"UnoCSS generation failed: {stderr.decode('utf-8', 'replace').strip()}")
        return stdout.decode('utf-8')

    async def setup(self) -> None:
        if shutil.which(self.node_binary) is None:
            raise EngineUnavailableError(f"{self.node_binary} not found. Please install Node.js and npm")
        logger.debug("Checking that @unocss/core and @unocss/preset-wind can be imported")
        try:
            await self._run_node(SETUP_SCRIPT)
        except EngineError as e:
            raise EngineUnavailableError(
                f"UnoCSS is not installed (npm install @unocss/core @unocss/preset-wind): {e}") from e

    async def generate(self, tokens: Set[str]) -> LayeredCSS:
        output = await self._run_node(GENERATE_SCRIPT, {'tokens': sorted(tokens), 'theme': self.theme})
        try:
            result = json.loads(output)
        except json.JSONDecodeError as e:
            raise EngineError(f"UnoCSS returned malformed output: {e}") from e
        return LayeredCSS(css=result.get('css', ''), matched=frozenset(result.get('matched', [])))
