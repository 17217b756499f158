"""
Tailwind Config Reader Module
Evaluates tailwind.config.js with Node.js and extracts the theme used to seed the engines.
"""

import json
import logging
import subprocess
from pathlib import Path
from typing import Any, Dict, Union

from core.errors import ConfigError

logger = logging.getLogger(__name__)

THEME_KEYS = ['colors', 'spacing', 'fontSize', 'borderRadius', 'boxShadow', 'fontFamily', 'screens']


class TailwindConfigReader:
    def __init__(self, node_binary: str = 'node'):
        self.node_binary = node_binary

    def read_config(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load a tailwind.config.js (or .json) file and return it as a dict."""
        config_path = Path(config_path).resolve()
        if config_path.suffix == '.json':
            try:
                with open(config_path, 'r', encoding='utf-8') as f:
                    return json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                raise ConfigError(f"Failed to parse config {config_path}: {e}") from e

        node_script = (
            f"const config = require({json.dumps(str(config_path))});\n"
            "console.log(JSON.stringify(config.default ?? config));"
        )
        try:
            result = subprocess.run([self.node_binary, '-e', node_script],
                                    capture_output=True, text=True, check=True)
            config = json.loads(result.stdout.strip())
        except (OSError, subprocess.CalledProcessError, json.JSONDecodeError) as e:
            detail = getattr(e, 'stderr', None) or e
            raise ConfigError(f"Failed to parse config {config_path}: {detail}") from e
        logger.debug(f"Parsed config from {config_path}: {list(config.keys())}")
        return config

    def extract_theme(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Merge `theme` and `theme.extend` for the keys the engines understand."""
        theme = config.get('theme', {}) if isinstance(config, dict) else {}
        extend = theme.get('extend', {}) if isinstance(theme, dict) else {}
        extensions = {}
        for key in THEME_KEYS:
            if key in theme:
                extensions[key] = theme[key]
            if key in extend:
                # extend overrides top-level values key by key
                if key in extensions and isinstance(extensions[key], dict) and isinstance(extend[key], dict):
                    extensions[key] = {**extensions[key], **extend[key]}
                else:
                    extensions[key] = extend[key]
        return extensions

    def load_theme(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        return self.extract_theme(self.read_config(config_path))
