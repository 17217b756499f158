"""
Semantic Namer Module
Assigns each scanned tag the CSS Module class name it will be rewritten to.
"""

from collections import Counter
from typing import List, Sequence

from .models import ElementNode, NodeKind, ScannedTag


class SemanticNamer:
    """
    Components are named after their (last) tag segment, plain elements get
    `<prefix><n>` with a counter local to one `assign` call.

    Two components ending in the same segment (two `Button`s, or
    `Checkbox.Indicator` and `Radio.Indicator`) share one name and therefore
    one stylesheet selector. Pass `disambiguate_components=True` to suffix the
    repeats with `_2`, `_3`, ... instead.
    """

    def __init__(self, plain_prefix: str = 'node', disambiguate_components: bool = False):
        self.plain_prefix = plain_prefix
        self.disambiguate_components = disambiguate_components

    def component_name(self, tag_name: str) -> str:
        return tag_name.split('.')[-1].lower()

    def assign(self, tags: Sequence[ScannedTag]) -> List[ElementNode]:
        plain_counter = 0
        component_seen = Counter()
        nodes = []
        for tag in tags:
            if tag.kind is NodeKind.COMPONENT:
                name = self.component_name(tag.tag_name)
                if self.disambiguate_components:
                    component_seen[name] += 1
                    if component_seen[name] > 1:
                        name = f"{name}_{component_seen[name]}"
            else:
                name = f"{self.plain_prefix}{plain_counter}"
                plain_counter += 1
            nodes.append(ElementNode(
                kind=tag.kind,
                tag_name=tag.tag_name,
                raw_classes=tag.raw_classes,
                source_line=tag.source_line,
                semantic_name=name,
            ))
        return nodes
