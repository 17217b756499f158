"""
Change Tracker Module
Collects the rewriter's change records into a report with aggregate counts.
"""

from pathlib import Path
from typing import Sequence, Union

import tinycss2

from core.models import (
    CLASS_REPLACEMENT,
    IMPORT_ADDED,
    ChangeRecord,
    ChangeReport,
    ChangeSummary,
    ElementNode,
)


class ChangeTracker:
    def count_css_rules(self, stylesheet: str) -> int:
        """Number of rule blocks (base and variant) in a generated stylesheet."""
        rules = tinycss2.parse_stylesheet(stylesheet, skip_comments=True, skip_whitespace=True)
        return sum(1 for rule in rules if rule.type == 'qualified-rule')

    def build_report(self,
                     changes: Sequence[ChangeRecord],
                     nodes: Sequence[ElementNode],
                     stylesheet: str,
                     original_file: Union[str, Path],
                     modified_file: Union[str, Path],
                     stylesheet_file: Union[str, Path]) -> ChangeReport:
        summary = ChangeSummary(
            total_nodes=len(nodes),
            classes_converted=sum(1 for change in changes if change.change_type == CLASS_REPLACEMENT),
            imports_added=sum(1 for change in changes if change.change_type == IMPORT_ADDED),
            css_rules_generated=self.count_css_rules(stylesheet),
        )
        return ChangeReport(
            original_file=str(original_file),
            modified_file=str(modified_file),
            stylesheet_file=str(stylesheet_file),
            changes=list(changes),
            summary=summary,
        )
