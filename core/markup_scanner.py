"""
Markup Scanner Module
Finds opening tags that carry a class attribute in JSX/TSX/HTML text.

The scan is deliberately text based: a tag inside a comment or a string literal
that looks like `<div className="...">` is captured too, and a `>` appearing in
an attribute expression before the class attribute ends the tag early.
"""

import re
import logging
from collections import Counter
from typing import List, Sequence

from .models import NodeKind, ScannedTag

logger = logging.getLogger(__name__)

WHITESPACE = re.compile(r'\s+')


def normalize_classes(class_string: str) -> str:
    """Collapse whitespace runs (including newlines) and trim."""
    return WHITESPACE.sub(' ', class_string).strip()


def attribute_alternation(class_attributes: Sequence[str]) -> str:
    # Longest first so `className` is not shadowed by `class`
    names = sorted(set(class_attributes), key=len, reverse=True)
    return '|'.join(re.escape(name) for name in names)


class MarkupScanner:
    def __init__(self, class_attributes: Sequence[str] = ('class', 'className')):
        self.class_attributes = tuple(class_attributes)
        self.tag_regex = re.compile(
            r'<(?P<tag>\w+(?:\.\w+)?)\s[^>]*?'
            r'(?<![\w-])(?:' + attribute_alternation(self.class_attributes) + r')='
            r'["\'](?P<classes>[^"\']*)["\']'
            r'[^>]*>'
        )

    def scan(self, content: str) -> List[ScannedTag]:
        """Return one ScannedTag per class-bearing opening tag, in document order."""
        tags = []
        for match in self.tag_regex.finditer(content):
            tag_name = match.group('tag')
            raw_classes = normalize_classes(match.group('classes'))
            # Recomputed from the match offset every time, never tracked incrementally
            line_no = content.count('\n', 0, match.start()) + 1
            if not raw_classes:
                logger.debug(f"Skipping <{tag_name}> on line {line_no}: empty class attribute")
                continue
            tags.append(ScannedTag(
                kind=NodeKind.for_tag(tag_name),
                tag_name=tag_name,
                raw_classes=raw_classes,
                source_line=line_no,
            ))
        logger.debug(f"Scanned {len(tags)} class-bearing tags")
        return tags

    def extract_classes(self, content: str) -> Counter:
        """Frequency of every utility class token across the scanned tags."""
        class_counter = Counter()
        for tag in self.scan(content):
            class_counter.update(tag.raw_classes.split())
        return class_counter
