"""
Conversion Data Model
Immutable records passed between the scanner, namer, resolver, assembler and rewriter.
"""

import re
from dataclasses import dataclass, field, asdict
from enum import Enum
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Tuple

LAYER_MARKER = re.compile(r'/\*\s*layer:\s*([\w-]+)\s*\*/')


class NodeKind(Enum):
    COMPONENT = 'component'
    PLAIN_ELEMENT = 'html'

    @classmethod
    def for_tag(cls, tag_name: str) -> 'NodeKind':
        """Components start with an uppercase letter or carry a namespace (Checkbox.Indicator)."""
        if tag_name[:1].isupper() or '.' in tag_name:
            return cls.COMPONENT
        return cls.PLAIN_ELEMENT


@dataclass(frozen=True)
class ScannedTag:
    kind: NodeKind
    tag_name: str
    raw_classes: str
    source_line: int


@dataclass(frozen=True)
class ElementNode:
    kind: NodeKind
    tag_name: str
    raw_classes: str
    source_line: int
    semantic_name: str

    @property
    def tokens(self) -> List[str]:
        return [token for token in self.raw_classes.split() if token]


@dataclass(frozen=True)
class LayeredCSS:
    """CSS text as returned by an atomic-CSS engine, split by `/* layer: name */` markers."""
    css: str
    matched: FrozenSet[str] = frozenset()

    def layer_names(self) -> List[str]:
        return LAYER_MARKER.findall(self.css)

    def layer(self, name: str) -> str:
        parts = LAYER_MARKER.split(self.css)
        # parts = [preamble, name1, body1, name2, body2, ...]
        for index in range(1, len(parts) - 1, 2):
            if parts[index] == name:
                return parts[index + 1].strip()
        return ''


@dataclass(frozen=True)
class GeneratedCSSRule:
    selector: str
    base_declarations: Tuple[str, ...] = ()
    variants: Dict[str, Tuple[str, ...]] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.base_declarations and not any(self.variants.values())


@dataclass(frozen=True)
class ChangeRecord:
    change_type: str  # 'import-added' | 'class-replacement'
    line: int
    original: str
    modified: str
    css_class: str
    semantic_name: str


IMPORT_ADDED = 'import-added'
CLASS_REPLACEMENT = 'class-replacement'
IMPORT_SEMANTIC_NAME = 'styles-import'


@dataclass
class ChangeSummary:
    total_nodes: int = 0
    classes_converted: int = 0
    imports_added: int = 0
    css_rules_generated: int = 0


@dataclass
class ChangeReport:
    original_file: str
    modified_file: str
    stylesheet_file: str
    changes: List[ChangeRecord] = field(default_factory=list)
    summary: ChangeSummary = field(default_factory=ChangeSummary)

    def to_dict(self) -> Dict:
        return {
            'original_file': self.original_file,
            'modified_file': self.modified_file,
            'stylesheet_file': self.stylesheet_file,
            'changes': [asdict(change) for change in self.changes],
            'summary': asdict(self.summary),
        }


@dataclass
class RewriteResult:
    text: str
    changes: List[ChangeRecord] = field(default_factory=list)


@dataclass
class ConversionResult:
    stylesheet: str
    component: str
    nodes: List[ElementNode]
    rules: List[GeneratedCSSRule]
    changes: List[ChangeRecord] = field(default_factory=list)
    stylesheet_path: Optional[Path] = None
    component_path: Optional[Path] = None
    change_report: Optional[ChangeReport] = None
