"""
Atomic CSS Engine Interface
The black-box service that turns a set of utility class tokens into layered CSS.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Set

from core.errors import SettingsError
from core.models import LayeredCSS


class AtomicCSSEngine(ABC):
    """
    An engine may need one-time asynchronous setup before `generate` is
    usable; callers await `setup()` first (the resolver does this once).
    """

    name = 'engine'

    async def setup(self) -> None:
        """Prepare the engine. The default engine needs no setup."""

    @abstractmethod
    async def generate(self, tokens: Set[str]) -> LayeredCSS:
        """Return CSS for `tokens`, grouped by `/* layer: name */` markers."""


def create_engine(name: str, theme: Optional[Dict[str, Any]] = None) -> AtomicCSSEngine:
    """Build the engine registered under `name` ('uno' or 'mapping')."""
    if name == 'uno':
        from .uno_engine import UnoCSSEngine
        return UnoCSSEngine(theme=theme)
    if name == 'mapping':
        from .mapping_engine import MappingEngine
        return MappingEngine(theme=theme)
    raise SettingsError(f"Unknown engine '{name}'")
