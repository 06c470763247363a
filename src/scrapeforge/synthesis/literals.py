"""Helpers for writing Python source text into generated scripts."""

from dataclasses import dataclass, field

# Identifier names shared by every generated script. They never change with the
# configuration so that scripts stay recognizable and diffable.
FOLDER_VAR = 'folder_name'
DATA_VAR = 'all_data'
SOUP_VAR = 'soup'
SESSION_VAR = 'driver'
DELAY_VAR = 'REQUEST_DELAY'

SCRIPT_IDENTIFIERS = (FOLDER_VAR, DATA_VAR, SOUP_VAR, SESSION_VAR, DELAY_VAR)

_THIRD_PARTY = ('bs4', 'requests', 'selenium', 'webdriver_manager', 'playwright')


@dataclass
class CodeBlock:
    """A piece of generated source plus the imports it needs.

    Attributes:
        code: Source text, indented for the top level
        imports: Import lines required by the code

    """

    code: str
    imports: set[str] = field(default_factory=set)


def py_str(value: str) -> str:
    """Render a value as a double-quoted Python string literal."""
    escaped = (
        value.replace('\\', '\\\\')
        .replace('"', '\\"')
        .replace('\n', '\\n')
        .replace('\r', '\\r')
        .replace('\t', '\\t')
    )
    return f'"{escaped}"'


def py_str_list(values: list[str], indent: str = '    ') -> str:
    """Render a list of strings as a multi-line Python list literal."""
    if not values:
        return '[]'
    items = ''.join(f'{indent}{py_str(value)},\n' for value in values)
    return f'[\n{items}]'


def py_number(value: float) -> str:
    """Render a number without a trailing '.0' where possible."""
    return f'{value:g}'


def indent(code: str, level: int = 1) -> str:
    """Indent every non-empty line by four spaces per level."""
    prefix = '    ' * level
    return '\n'.join(prefix + line if line.strip() else '' for line in code.splitlines())


def render_imports(imports: set[str]) -> str:
    """Order import lines: standard library first, then third-party packages.

    Within each group plain ``import x`` lines come before ``from x import y``
    lines, both sorted alphabetically.
    """

    def module_of(line: str) -> str:
        return line.split()[1]

    def sort_key(line: str) -> tuple[bool, bool, str]:
        is_third_party = module_of(line).split('.')[0] in _THIRD_PARTY
        return is_third_party, line.startswith('from '), module_of(line)

    ordered = sorted(imports, key=sort_key)
    lines: list[str] = []
    previous_group = None
    for line in ordered:
        group = module_of(line).split('.')[0] in _THIRD_PARTY
        if previous_group is not None and group != previous_group:
            lines.append('')
        lines.append(line)
        previous_group = group
    return '\n'.join(lines)


def compose_script(imports: set[str], sections: list[str]) -> str:
    """Join the import header and script sections with blank lines."""
    parts = [render_imports(imports)] if imports else []
    parts.extend(section.strip('\n') for section in sections if section.strip())
    return '\n\n'.join(parts) + '\n'
