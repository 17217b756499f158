import sys
import os
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from core.models import GeneratedCSSRule
from core.stylesheet_assembler import StylesheetAssembler

def test_assemble_base_and_variant_blocks():
    rules = [
        GeneratedCSSRule('node0', ('display: flex', 'align-items: center'), {'hover': ('color: red',)}),
        GeneratedCSSRule('button', ('padding: 1rem',)),
    ]
    css = StylesheetAssembler().assemble(rules)
    assert css == (
        "/* Generated CSS Modules from utility classes */\n"
        "\n"
        ".node0 {\n"
        "  display: flex;\n"
        "  align-items: center;\n"
        "}\n"
        "\n"
        ".node0:hover {\n"
        "  color: red;\n"
        "}\n"
        "\n"
        ".button {\n"
        "  padding: 1rem;\n"
        "}\n"
    )

def test_empty_rules_are_skipped():
    rules = [
        GeneratedCSSRule('node0'),
        GeneratedCSSRule('node1', (), {'hover': ()}),
        GeneratedCSSRule('node2', ('margin: 0',)),
    ]
    css = StylesheetAssembler().assemble(rules)
    assert '.node0' not in css
    assert '.node1' not in css
    assert '.node2 {' in css

def test_variant_only_rule_is_emitted():
    css = StylesheetAssembler().assemble([GeneratedCSSRule('trigger', (), {'focus': ('outline: none',)})])
    assert '.trigger {' not in css
    assert '.trigger:focus {\n  outline: none;\n}' in css

def test_declaration_order_is_preserved_without_dedup():
    rule = GeneratedCSSRule('node0', ('color: red', 'margin: 0', 'color: red'))
    css = StylesheetAssembler().assemble([rule])
    assert css.count('color: red;') == 2
    assert css.index('color: red') < css.index('margin: 0')

def test_rule_order_follows_input_order():
    rules = [GeneratedCSSRule(name, ('margin: 0',)) for name in ('zeta', 'alpha', 'node3')]
    css = StylesheetAssembler().assemble(rules)
    assert css.index('.zeta') < css.index('.alpha') < css.index('.node3')

def test_header_only_when_no_rules():
    assembler = StylesheetAssembler(header_comment='custom header')
    assert assembler.assemble([]) == '/* custom header */\n\n'

def test_trailing_semicolons_are_not_doubled():
    css = StylesheetAssembler().assemble([GeneratedCSSRule('node0', ('display: flex;',))])
    assert 'display: flex;\n' in css
    assert ';;' not in css
