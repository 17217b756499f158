"""
Stylesheet Assembler Module
Formats generated rules as a CSS Modules stylesheet.
"""

from typing import Iterable, List, Sequence

from .models import GeneratedCSSRule


class StylesheetAssembler:
    def __init__(self, header_comment: str = 'Generated CSS Modules from utility classes'):
        self.header_comment = header_comment

    def format_block(self, selector: str, declarations: Sequence[str]) -> str:
        lines = [f".{selector} {{"]
        lines.extend(f"  {declaration.strip().rstrip(';')};" for declaration in declarations)
        lines.append('}')
        return '\n'.join(lines)

    def blocks(self, rules: Iterable[GeneratedCSSRule]) -> List[str]:
        blocks = []
        for rule in rules:
            if rule.is_empty:
                continue
            if rule.base_declarations:
                blocks.append(self.format_block(rule.selector, rule.base_declarations))
            for pseudo, declarations in rule.variants.items():
                if declarations:
                    blocks.append(self.format_block(f"{rule.selector}:{pseudo}", declarations))
        return blocks

    def assemble(self, rules: Iterable[GeneratedCSSRule]) -> str:
        """Render rules in the given order; empty rules are left out."""
        content = f"/* {self.header_comment} */\n\n"
        blocks = self.blocks(rules)
        if blocks:
            content += '\n\n'.join(blocks) + '\n'
        return content
