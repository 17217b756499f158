"""
CSS Resolver Module
Resolves each element's utility classes through an atomic-CSS engine and splits
the result into base declarations and pseudo-class variants.
"""

import re
import asyncio
import logging
from typing import Dict, List, Optional, Sequence, Tuple

import tinycss2

from tailwind.engine import AtomicCSSEngine
from .models import ElementNode, GeneratedCSSRule

logger = logging.getLogger(__name__)

# `.hover\:bg-blue-600:hover`: one class, one single-colon pseudo, no combinators
VARIANT_SELECTOR = re.compile(r'^\.(?:\\.|[\w-])+:(?P<pseudo>[\w-]+)$')


def declaration_list(content) -> List[str]:
    """`property: value` strings for every declaration in a rule body, in source order."""
    declarations = []
    for decl in tinycss2.parse_declaration_list(content, skip_comments=True, skip_whitespace=True):
        if decl.type != 'declaration':
            continue
        value = tinycss2.serialize(decl.value).strip()
        important = ' !important' if decl.important else ''
        declarations.append(f"{decl.name}: {value}{important}")
    return declarations


def split_layer(css: str) -> Tuple[List[str], Dict[str, List[str]]]:
    """
    Split one layer of CSS into base declarations and `pseudo -> declarations`.

    A rule whose selector is exactly `.class:pseudo` becomes a variant; every
    other qualified rule feeds the base list. At-rules are not unwrapped.
    """
    base: List[str] = []
    variants: Dict[str, List[str]] = {}
    for rule in tinycss2.parse_stylesheet(css, skip_comments=True, skip_whitespace=True):
        if rule.type == 'at-rule':
            logger.debug(f"Skipping @{rule.lower_at_keyword} block in utility layer")
            continue
        if rule.type != 'qualified-rule':
            continue
        selector = tinycss2.serialize(rule.prelude).strip()
        declarations = declaration_list(rule.content)
        variant = VARIANT_SELECTOR.match(selector)
        if variant:
            variants.setdefault(variant.group('pseudo'), []).extend(declarations)
        else:
            base.extend(declarations)
    return base, variants


class CSSResolver:
    def __init__(self, engine: AtomicCSSEngine, default_layer: str = 'default'):
        self.engine = engine
        self.default_layer = default_layer
        self._ready = False
        self._ready_lock = asyncio.Lock()

    async def ensure_ready(self) -> None:
        """Run the engine's one-time setup; later calls return immediately."""
        if self._ready:
            return
        async with self._ready_lock:
            if not self._ready:
                logger.debug(f"Setting up {self.engine.name} engine")
                await self.engine.setup()
                self._ready = True

    async def resolve(self, node: ElementNode) -> Optional[GeneratedCSSRule]:
        """Resolve one node; engine failures and empty output yield None."""
        await self.ensure_ready()
        tokens = set(node.tokens)
        try:
            result = await self.engine.generate(tokens)
        except Exception as e:
            logger.warning(f"Failed to generate CSS for {node.tag_name} ({node.semantic_name}): {e}")
            return None
        if not result.css.strip():
            logger.warning(f"No CSS generated for {node.tag_name} ({node.semantic_name}) "
                           f"from classes '{node.raw_classes}'")
            return None
        unmatched = tokens - set(result.matched)
        if result.matched and unmatched:
            logger.debug(f"Unmatched classes on {node.semantic_name}: {', '.join(sorted(unmatched))}")
        base, variants = split_layer(result.layer(self.default_layer))
        return GeneratedCSSRule(
            selector=node.semantic_name,
            base_declarations=tuple(base),
            variants={pseudo: tuple(decls) for pseudo, decls in variants.items()},
        )

    async def resolve_all(self, nodes: Sequence[ElementNode]) -> List[GeneratedCSSRule]:
        """Resolve nodes one at a time in document order; failed nodes leave gaps."""
        await self.ensure_ready()
        rules = []
        for node in nodes:
            logger.debug(f"Processing {node.tag_name} ({node.semantic_name})")
            rule = await self.resolve(node)
            if rule is not None:
                rules.append(rule)
        return rules
