"""
Mapping Engine
Pure-Python Tailwind resolver built from static and pattern-based class mappings.

Covers the common layout, spacing, typography, color and border utilities plus
pseudo-class (`hover:`, `focus:` ...) and responsive (`md:` ...) prefixes. Its
output mimics UnoCSS: rules grouped under `/* layer: <name> */` markers.
"""

import re
import logging
from typing import Any, Callable, Dict, List, Optional, Pattern, Set, Tuple

from core.models import LayeredCSS
from .engine import AtomicCSSEngine

logger = logging.getLogger(__name__)

Declaration = Tuple[str, str]

PSEUDO_VARIANTS = {'hover', 'focus', 'active', 'disabled', 'visited', 'focus-visible', 'focus-within', 'checked'}

BREAKPOINTS = {
    'sm': '(min-width: 640px)',
    'md': '(min-width: 768px)',
    'lg': '(min-width: 1024px)',
    'xl': '(min-width: 1280px)',
    '2xl': '(min-width: 1536px)',
}

PREFLIGHT = '*,::before,::after{box-sizing:border-box;border-width:0;border-style:solid;}'

TEXT_SIZES = {
    'xs': '0.75rem',
    'sm': '0.875rem',
    'base': '1rem',
    'lg': '1.125rem',
    'xl': '1.25rem',
    '2xl': '1.5rem',
    '3xl': '1.875rem',
    '4xl': '2.25rem',
    '5xl': '3rem',
    '6xl': '3.75rem',
    '7xl': '4.5rem',
    '8xl': '6rem',
    '9xl': '8rem',
}

RADII = {
    'none': '0',
    'sm': '0.125rem',
    'md': '0.375rem',
    'lg': '0.5rem',
    'xl': '0.75rem',
    '2xl': '1rem',
    '3xl': '1.5rem',
    'full': '9999px',
}

COLORS = {
    'blue': {
        '50': '#eff6ff', '100': '#dbeafe', '200': '#bfdbfe', '300': '#93c5fd', '400': '#60a5fa',
        '500': '#3b82f6', '600': '#2563eb', '700': '#1d4ed8', '800': '#1e40af', '900': '#1e3a8a',
    },
    'red': {
        '50': '#fef2f2', '100': '#fee2e2', '200': '#fecaca', '300': '#fca5a5', '400': '#f87171',
        '500': '#ef4444', '600': '#dc2626', '700': '#b91c1c', '800': '#991b1b', '900': '#7f1d1d',
    },
    'green': {
        '50': '#f0fdf4', '100': '#dcfce7', '200': '#bbf7d0', '300': '#86efac', '400': '#4ade80',
        '500': '#22c55e', '600': '#16a34a', '700': '#15803d', '800': '#166534', '900': '#14532d',
    },
    'gray': {
        '50': '#f9fafb', '100': '#f3f4f6', '200': '#e5e7eb', '300': '#d1d5db', '400': '#9ca3af',
        '500': '#6b7280', '600': '#4b5563', '700': '#374151', '800': '#1f2937', '900': '#111827',
    },
    'purple': {
        '50': '#faf5ff', '100': '#f3e8ff', '200': '#e9d5ff', '300': '#d8b4fe', '400': '#c084fc',
        '500': '#a855f7', '600': '#9333ea', '700': '#7c3aed', '800': '#6b21a8', '900': '#581c87',
    },
    'white': '#ffffff',
    'black': '#000000',
    'transparent': 'transparent',
    'current': 'currentColor',
}

COLOR_PROPERTIES = {
    'bg': 'background-color',
    'text': 'color',
    'border': 'border-color',
    'outline': 'outline-color',
}

STATIC_MAPPINGS: Dict[str, List[Declaration]] = {
    # Display
    'flex': [('display', 'flex')],
    'inline-flex': [('display', 'inline-flex')],
    'grid': [('display', 'grid')],
    'inline-grid': [('display', 'inline-grid')],
    'block': [('display', 'block')],
    'inline': [('display', 'inline')],
    'inline-block': [('display', 'inline-block')],
    'hidden': [('display', 'none')],
    # Flex
    'flex-row': [('flex-direction', 'row')],
    'flex-col': [('flex-direction', 'column')],
    'flex-row-reverse': [('flex-direction', 'row-reverse')],
    'flex-col-reverse': [('flex-direction', 'column-reverse')],
    'flex-wrap': [('flex-wrap', 'wrap')],
    'flex-nowrap': [('flex-wrap', 'nowrap')],
    'flex-1': [('flex', '1 1 0%')],
    'flex-auto': [('flex', '1 1 auto')],
    'flex-none': [('flex', 'none')],
    'shrink-0': [('flex-shrink', '0')],
    'grow': [('flex-grow', '1')],
    # Alignment
    'items-start': [('align-items', 'flex-start')],
    'items-center': [('align-items', 'center')],
    'items-end': [('align-items', 'flex-end')],
    'items-stretch': [('align-items', 'stretch')],
    'items-baseline': [('align-items', 'baseline')],
    'justify-start': [('justify-content', 'flex-start')],
    'justify-center': [('justify-content', 'center')],
    'justify-end': [('justify-content', 'flex-end')],
    'justify-between': [('justify-content', 'space-between')],
    'justify-around': [('justify-content', 'space-around')],
    'justify-evenly': [('justify-content', 'space-evenly')],
    'self-center': [('align-self', 'center')],
    # Text
    'text-left': [('text-align', 'left')],
    'text-center': [('text-align', 'center')],
    'text-right': [('text-align', 'right')],
    'text-justify': [('text-align', 'justify')],
    'uppercase': [('text-transform', 'uppercase')],
    'lowercase': [('text-transform', 'lowercase')],
    'capitalize': [('text-transform', 'capitalize')],
    'underline': [('text-decoration-line', 'underline')],
    'no-underline': [('text-decoration-line', 'none')],
    'italic': [('font-style', 'italic')],
    'truncate': [('overflow', 'hidden'), ('text-overflow', 'ellipsis'), ('white-space', 'nowrap')],
    'whitespace-nowrap': [('white-space', 'nowrap')],
    # Font weight
    'font-thin': [('font-weight', '100')],
    'font-light': [('font-weight', '300')],
    'font-normal': [('font-weight', '400')],
    'font-medium': [('font-weight', '500')],
    'font-semibold': [('font-weight', '600')],
    'font-bold': [('font-weight', '700')],
    'font-extrabold': [('font-weight', '800')],
    'font-black': [('font-weight', '900')],
    # Position
    'static': [('position', 'static')],
    'relative': [('position', 'relative')],
    'absolute': [('position', 'absolute')],
    'fixed': [('position', 'fixed')],
    'sticky': [('position', 'sticky')],
    'inset-0': [('inset', '0')],
    # Layout
    'container': [('max-width', '1200px'), ('margin', '0 auto')],
    'mx-auto': [('margin-left', 'auto'), ('margin-right', 'auto')],
    'overflow-hidden': [('overflow', 'hidden')],
    'overflow-auto': [('overflow', 'auto')],
    'cursor-pointer': [('cursor', 'pointer')],
    'cursor-not-allowed': [('cursor', 'not-allowed')],
    'pointer-events-none': [('pointer-events', 'none')],
    'select-none': [('user-select', 'none')],
    # Border
    'border': [('border-width', '1px')],
    'border-b': [('border-bottom-width', '1px')],
    'border-t': [('border-top-width', '1px')],
    'border-l': [('border-left-width', '1px')],
    'border-r': [('border-right-width', '1px')],
    'border-solid': [('border-style', 'solid')],
    'border-dashed': [('border-style', 'dashed')],
    'rounded': [('border-radius', '0.25rem')],
    # Shadow
    'shadow': [('box-shadow', '0 1px 3px 0 rgba(0, 0, 0, 0.1), 0 1px 2px 0 rgba(0, 0, 0, 0.06)')],
    'shadow-md': [('box-shadow', '0 4px 6px -1px rgba(0, 0, 0, 0.1), 0 2px 4px -1px rgba(0, 0, 0, 0.06)')],
    'shadow-lg': [('box-shadow', '0 10px 15px -3px rgba(0, 0, 0, 0.1), 0 4px 6px -2px rgba(0, 0, 0, 0.05)')],
    'shadow-none': [('box-shadow', '0 0 #0000')],
    # Transition
    'transition': [('transition-property', 'color, background-color, border-color, box-shadow, opacity, transform'),
                   ('transition-duration', '150ms')],
    'transition-shadow': [('transition', 'box-shadow 150ms ease-in-out')],
    'transition-colors': [('transition-property', 'color, background-color, border-color'),
                          ('transition-duration', '150ms')],
    # Focus helpers
    'outline-none': [('outline', '2px solid transparent'), ('outline-offset', '2px')],
    'ring': [('box-shadow', '0 0 0 3px rgba(59, 130, 246, 0.5)')],
    'sr-only': [('position', 'absolute'), ('width', '1px'), ('height', '1px'), ('padding', '0'),
                ('margin', '-1px'), ('overflow', 'hidden'), ('clip', 'rect(0, 0, 0, 0)'),
                ('white-space', 'nowrap'), ('border-width', '0')],
}

SIDES = {
    'x': ('left', 'right'),
    'y': ('top', 'bottom'),
    't': ('top',),
    'r': ('right',),
    'b': ('bottom',),
    'l': ('left',),
}


def spacing(value: str) -> Optional[str]:
    """Tailwind spacing scale: 1 unit = 0.25rem."""
    if value == 'px':
        return '1px'
    if value == 'auto':
        return 'auto'
    try:
        amount = float(value) * 0.25
    except ValueError:
        return None
    return '0' if amount == 0 else f"{amount:g}rem"


def size(value: str, axis: str) -> Optional[str]:
    keywords = {
        'full': '100%',
        'screen': '100vw' if axis == 'width' else '100vh',
        'auto': 'auto',
        'min': 'min-content',
        'max': 'max-content',
        'fit': 'fit-content',
    }
    if value in keywords:
        return keywords[value]
    fraction = re.fullmatch(r'(\d+)/(\d+)', value)
    if fraction:
        numerator, denominator = (int(part) for part in fraction.groups())
        if denominator == 0:
            return None
        return f"{numerator / denominator * 100:g}%"
    return spacing(value)


def escape_class(token: str) -> str:
    """Escape a utility token for use as a CSS class selector."""
    return re.sub(r'([^\w-])', r'\\\1', token)


class MappingEngine(AtomicCSSEngine):
    name = 'mapping'

    def __init__(self, theme: Optional[Dict[str, Any]] = None, preflights: bool = True):
        self.theme = theme or {}
        self.preflights = preflights
        self.colors = dict(COLORS)
        self.colors.update(self.theme.get('colors', {}) or {})
        self.spacing_overrides = dict(self.theme.get('spacing', {}) or {})
        self.text_sizes = dict(TEXT_SIZES)
        for key, value in (self.theme.get('fontSize', {}) or {}).items():
            # fontSize entries may be `value` or `[value, lineHeight]`
            self.text_sizes[key] = value[0] if isinstance(value, (list, tuple)) else value
        self.radii = dict(RADII)
        self.radii.update(self.theme.get('borderRadius', {}) or {})
        self.dynamic_mappings: List[Tuple[Pattern, Callable[[re.Match], List[Declaration]]]] = [
            (re.compile(r'^gap-([xy]-)?(.+)$'), self._gap),
            (re.compile(r'^p([xytrbl])?-(.+)$'), lambda m: self._box('padding', m)),
            (re.compile(r'^m([xytrbl])?-(.+)$'), lambda m: self._box('margin', m)),
            (re.compile(r'^w-(.+)$'), lambda m: self._size('width', m.group(1))),
            (re.compile(r'^h-(.+)$'), lambda m: self._size('height', m.group(1))),
            (re.compile(r'^min-w-(.+)$'), lambda m: self._size('min-width', m.group(1))),
            (re.compile(r'^max-w-(.+)$'), lambda m: self._size('max-width', m.group(1))),
            (re.compile(r'^min-h-(.+)$'), lambda m: self._size('min-height', m.group(1))),
            (re.compile(r'^text-(.+)$'), self._text_size),
            (re.compile(r'^rounded-(.+)$'), self._radius),
            (re.compile(r'^grid-cols-(\d+)$'),
             lambda m: [('grid-template-columns', f"repeat({m.group(1)}, minmax(0, 1fr))")]),
            (re.compile(r'^border-(\d+)$'), lambda m: [('border-width', f"{m.group(1)}px")]),
            (re.compile(r'^ring-(\d+)$'),
             lambda m: [('box-shadow', f"0 0 0 {m.group(1)}px rgba(59, 130, 246, 0.5)")]),
            (re.compile(r'^ring-(.+)$'), self._ring_color),
            (re.compile(r'^opacity-(\d+)$'), lambda m: [('opacity', f"{int(m.group(1)) / 100:g}")]),
            (re.compile(r'^z-(\d+)$'), lambda m: [('z-index', m.group(1))]),
            (re.compile(r'^(bg|text|border|outline)-(.+)$'), self._color),
        ]

    def color(self, name: str) -> Optional[str]:
        """Look up `blue-500`, `white` or a theme color (`primary`, `primary-500`)."""
        if name in self.colors:
            value = self.colors[name]
            if isinstance(value, dict):
                return value.get('DEFAULT')
            return value
        palette, _, shade = name.rpartition('-')
        scale = self.colors.get(palette)
        if isinstance(scale, dict):
            return scale.get(shade)
        return None

    def _spacing(self, value: str) -> Optional[str]:
        if value in self.spacing_overrides:
            return self.spacing_overrides[value]
        return spacing(value)

    def _gap(self, match: re.Match) -> List[Declaration]:
        value = self._spacing(match.group(2))
        if value is None:
            return []
        axis = match.group(1)
        if axis == 'x-':
            return [('column-gap', value)]
        if axis == 'y-':
            return [('row-gap', value)]
        return [('gap', value)]

    def _box(self, prop: str, match: re.Match) -> List[Declaration]:
        value = self._spacing(match.group(2))
        if value is None or (prop == 'padding' and value == 'auto'):
            return []
        side = match.group(1)
        if side is None:
            return [(prop, value)]
        return [(f"{prop}-{edge}", value) for edge in SIDES[side]]

    def _size(self, prop: str, value: str) -> List[Declaration]:
        axis = 'width' if 'width' in prop else 'height'
        resolved = self.spacing_overrides.get(value) or size(value, axis)
        return [(prop, resolved)] if resolved else []

    def _text_size(self, match: re.Match) -> List[Declaration]:
        key = match.group(1)
        if key in self.text_sizes:
            return [('font-size', self.text_sizes[key])]
        return []

    def _radius(self, match: re.Match) -> List[Declaration]:
        key = match.group(1)
        if key in self.radii:
            return [('border-radius', self.radii[key])]
        return []

    def _ring_color(self, match: re.Match) -> List[Declaration]:
        value = self.color(match.group(1))
        return [('--un-ring-color', value)] if value else []

    def _color(self, match: re.Match) -> List[Declaration]:
        value = self.color(match.group(2))
        return [(COLOR_PROPERTIES[match.group(1)], value)] if value else []

    def convert(self, utility: str) -> List[Declaration]:
        """Declarations for one utility without variant prefixes; empty when unknown."""
        if utility in STATIC_MAPPINGS:
            return list(STATIC_MAPPINGS[utility])
        for pattern, convert in self.dynamic_mappings:
            match = pattern.match(utility)
            if match:
                declarations = convert(match)
                if declarations:
                    return declarations
        return []

    def split_variants(self, token: str) -> Tuple[Optional[str], Optional[str], str]:
        """`md:hover:bg-blue-500` -> ('md', 'hover', 'bg-blue-500'); unknown prefixes yield no utility."""
        *prefixes, utility = token.split(':')
        breakpoint = pseudo = None
        for prefix in prefixes:
            if prefix in BREAKPOINTS and breakpoint is None:
                breakpoint = prefix
            elif prefix in PSEUDO_VARIANTS and pseudo is None:
                pseudo = prefix
            else:
                return None, None, ''
        return breakpoint, pseudo, utility

    async def generate(self, tokens: Set[str]) -> LayeredCSS:
        base_rules, pseudo_rules, media_rules = [], [], []
        matched = set()
        for token in sorted(tokens):
            breakpoint, pseudo, utility = self.split_variants(token)
            declarations = self.convert(utility) if utility else []
            if not declarations:
                logger.debug(f"No mapping for utility class '{token}'")
                continue
            matched.add(token)
            selector = '.' + escape_class(token) + (f":{pseudo}" if pseudo else '')
            body = ''.join(f"{prop}:{value};" for prop, value in declarations)
            rule = f"{selector}{{{body}}}"
            if breakpoint:
                media_rules.append(f"@media {BREAKPOINTS[breakpoint]}{{{rule}}}")
            elif pseudo:
                pseudo_rules.append(rule)
            else:
                base_rules.append(rule)
        if not matched:
            return LayeredCSS(css='', matched=frozenset())
        sections = []
        if self.preflights:
            sections.append(f"/* layer: preflights */\n{PREFLIGHT}")
        sections.append('/* layer: default */\n' + '\n'.join(base_rules + pseudo_rules + media_rules))
        return LayeredCSS(css='\n'.join(sections), matched=frozenset(matched))
