import ast

import pytest

from scrapeforge.synthesis.literals import compose_script, indent, py_number, py_str, py_str_list, render_imports


@pytest.mark.parametrize(
    'value',
    ['plain', 'with "double" quotes', "it's", 'back\\slash', 'line\nbreak\ttab\r', 'ünïcode ✓', ''],
)
def test_py_str_evaluates_back_to_value(value):
    assert ast.literal_eval(py_str(value)) == value


def test_py_str_uses_double_quotes():
    assert py_str('div.item') == '"div.item"'


def test_py_str_list():
    assert py_str_list([]) == '[]'
    assert py_str_list(['a:1', 'b"2']) == '[\n    "a:1",\n    "b\\"2",\n]'
    assert ast.literal_eval(py_str_list(['a:1', 'b"2'])) == ['a:1', 'b"2']


def test_py_number():
    assert py_number(2.0) == '2'
    assert py_number(1.5) == '1.5'
    assert py_number(0.25) == '0.25'


def test_indent_skips_blank_lines():
    assert indent('a\n\nb', 2) == '        a\n\n        b'


def test_render_imports_groups_stdlib_before_third_party():
    imports = {
        'from bs4 import BeautifulSoup',
        'import requests',
        'import time',
        'from urllib.parse import urljoin',
        'import csv',
    }

    assert render_imports(imports) == (
        'import csv\nimport time\nfrom urllib.parse import urljoin\n\nimport requests\nfrom bs4 import BeautifulSoup'
    )


def test_compose_script_drops_empty_sections():
    script = compose_script({'import os'}, ['# a\n', '', 'x = 1'])

    assert script == 'import os\n\n# a\n\nx = 1\n'
