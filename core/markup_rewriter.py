"""
Markup Rewriter Module
Replaces utility class attributes with CSS Module references and adds the stylesheet import.
"""

import re
import logging
from typing import List, Sequence, Tuple

from .markup_scanner import attribute_alternation
from .models import (
    CLASS_REPLACEMENT,
    IMPORT_ADDED,
    IMPORT_SEMANTIC_NAME,
    ChangeRecord,
    ElementNode,
    RewriteResult,
)

logger = logging.getLogger(__name__)

IMPORT_LINE = re.compile(r'^import.*?from.*?;$', re.MULTILINE)


def one_line(snippet: str) -> str:
    return ' '.join(snippet.split())


class MarkupRewriter:
    """
    Every occurrence of a node's tag + class value is rewritten, not only the
    one the node was scanned from. Identical `<div className="p-4">` tags all
    end up pointing at the first such node's class; later identical nodes find
    nothing left to replace.
    """

    def __init__(self, style_token: str = 'styles', class_attributes: Sequence[str] = ('class', 'className')):
        self.style_token = style_token
        self.attributes = attribute_alternation(class_attributes)

    def import_statement(self, stylesheet_name: str) -> str:
        return f"import {self.style_token} from './{stylesheet_name}';"

    def reference(self, node: ElementNode) -> str:
        return f"className={{{self.style_token}.{node.semantic_name}}}"

    def class_pattern(self, node: ElementNode) -> re.Pattern:
        value = r'\s*' + r'\s+'.join(re.escape(token) for token in node.tokens) + r'\s*'
        return re.compile(
            r'(?P<head><' + re.escape(node.tag_name) + r'\s[^>]*?)'
            r'(?<![\w-])(?:' + self.attributes + r')=["\']' + value + r'["\']'
        )

    def replace_classes(self, content: str, nodes: Sequence[ElementNode]) -> Tuple[str, List[ChangeRecord]]:
        """Substitute class attributes for all nodes, matching against the unmodified text."""
        claimed = []
        for node in nodes:
            count = 0
            for match in self.class_pattern(node).finditer(content):
                start, end = match.span()
                if any(start < other_end and other_start < end for other_start, other_end, _, _ in claimed):
                    continue
                claimed.append((start, end, match.group('head') + self.reference(node), node))
                count += 1
            if count == 0:
                logger.debug(f"No remaining class attribute to rewrite for {node.tag_name} ({node.semantic_name})")
            elif count > 1:
                logger.debug(f"Rewrote {count} occurrences of <{node.tag_name}> with styles.{node.semantic_name}")
        claimed.sort(key=lambda item: item[0])

        pieces = []
        changes = []
        cursor = 0
        for start, end, replacement, node in claimed:
            pieces.append(content[cursor:start])
            pieces.append(replacement)
            cursor = end
            changes.append(ChangeRecord(
                change_type=CLASS_REPLACEMENT,
                line=content.count('\n', 0, start) + 1,
                original=one_line(content[start:end]),
                modified=one_line(replacement),
                css_class=node.raw_classes,
                semantic_name=node.semantic_name,
            ))
        pieces.append(content[cursor:])
        return ''.join(pieces), changes

    def insert_import(self, content: str, stylesheet_name: str) -> Tuple[str, ChangeRecord]:
        """Put the stylesheet import after the last import line, or first in the file."""
        statement = self.import_statement(stylesheet_name)
        imports = list(IMPORT_LINE.finditer(content))
        if imports:
            insert_at = imports[-1].end()
            updated = content[:insert_at] + '\n' + statement + content[insert_at:]
            line_no = content.count('\n', 0, insert_at) + 2
        else:
            updated = statement + '\n\n' + content
            line_no = 1
        record = ChangeRecord(
            change_type=IMPORT_ADDED,
            line=line_no,
            original='',
            modified=statement,
            css_class='',
            semantic_name=IMPORT_SEMANTIC_NAME,
        )
        return updated, record

    def rewrite(self, content: str, nodes: Sequence[ElementNode], stylesheet_name: str) -> RewriteResult:
        body, replacements = self.replace_classes(content, nodes)
        updated, import_record = self.insert_import(body, stylesheet_name)
        logger.debug(f"Rewrote {len(replacements)} class attributes")
        return RewriteResult(text=updated, changes=[import_record] + replacements)
