"""Compiles loose (tag, attrs) descriptors into CSS selectors.

The attrs micro-language is a list of ``key=value`` pairs separated by commas
or whitespace, e.g. ``class="card featured", data-kind=book``. It is scanned
left to right with the grammar below; characters that do not start a valid
pair are skipped.

    pair   := key ws* '=' ws* value
    key    := [A-Za-z0-9_-]+                 (compared case-insensitively)
    value  := '"' [^"]* '"'
            | "'" [^']* "'"
            | [^\\s,]+                       (also used for unterminated quotes)

Known edge cases kept on purpose:
    - ``id`` values are truncated to their first whitespace-delimited token.
    - Unquoted values stop at the first comma or whitespace.
"""

import logging
import string
from dataclasses import dataclass

from bs4 import Tag

from scrapeforge.models import ContainerDescriptor

logger = logging.getLogger(__name__)

# A syntactically valid type selector that never matches a real element
INVALID_SELECTOR = 'INVALID_SELECTOR_DUE_TO_ATTR_PARSE_ERROR'

_KEY_CHARS = frozenset(string.ascii_letters + string.digits + '_-')
_QUOTES = ('"', "'")
# CSS strings cannot hold these unescaped and the emitter does not escape them
_UNREPRESENTABLE = ('\\', '\n', '\r', '\f')

# Attributes never copied into a descriptor derived from a clicked element
_SKIPPED_ATTRIBUTES = {'id', 'style'}


@dataclass(frozen=True)
class AttrToken:
    """One ``key=value`` pair found in an attrs string.

    Attributes:
        key: Lower-cased attribute name
        value: Attribute value with surrounding quotes removed

    """

    key: str
    value: str


class AttrTokenizer:
    """Single-pass scanner for the attrs micro-language."""

    def __init__(self, text: str):
        """Initialize the tokenizer.

        Args:
            text: The raw attrs string

        """
        self.text = text
        self.pos = 0

    def tokens(self) -> list[AttrToken]:
        """Scan the whole string and return every pair in order.

        Returns:
            List of AttrToken, possibly empty.

        """
        found: list[AttrToken] = []
        while self.pos < len(self.text):
            if self.text[self.pos] not in _KEY_CHARS:
                self.pos += 1
                continue
            token = self._read_pair()
            if token is not None:
                found.append(token)
        return found

    def _read_pair(self) -> AttrToken | None:
        key = self._read_while(lambda ch: ch in _KEY_CHARS)
        after_key = self.pos

        self._skip_whitespace()
        if self._current() != '=':
            self.pos = after_key
            return None
        self.pos += 1
        self._skip_whitespace()

        value = self._read_value()
        if value is None:
            self.pos = after_key
            return None
        return AttrToken(key=key.lower(), value=value)

    def _read_value(self) -> str | None:
        quote = self._current()
        if quote in _QUOTES:
            closing = self.text.find(quote, self.pos + 1)
            if closing != -1:
                value = self.text[self.pos + 1 : closing]
                self.pos = closing + 1
                return value

        value = self._read_while(lambda ch: not ch.isspace() and ch != ',')
        return value or None

    def _read_while(self, predicate) -> str:
        start = self.pos
        while self.pos < len(self.text) and predicate(self.text[self.pos]):
            self.pos += 1
        return self.text[start : self.pos]

    def _skip_whitespace(self) -> None:
        self._read_while(str.isspace)

    def _current(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ''


def tokenize_attrs(attrs: str) -> list[AttrToken]:
    """Split an attrs string into ``key=value`` tokens.

    Args:
        attrs: Free-form attribute descriptor

    Returns:
        Tokens in scan order.

    """
    return AttrTokenizer(attrs).tokens()


def _emit(token: AttrToken) -> str:
    if token.key == 'id':
        parts = token.value.split()
        return f'#{parts[0]}' if parts else ''

    if token.key == 'class':
        classes = '.'.join(token.value.split())
        return f'.{classes}' if classes else ''

    escaped = token.value.replace('"', '\\"')
    return f'[{token.key}="{escaped}"]'


def compile_selector(tag: str, attrs: str) -> str:
    """Turn a (tag, attrs) descriptor into a CSS selector.

    Never raises: any failure yields INVALID_SELECTOR, which matches nothing.

    Args:
        tag: HTML tag used verbatim (after trimming) as the selector head
        attrs: Free-form attribute descriptor

    Returns:
        CSS selector string.

    Examples:
        >>> compile_selector('div', 'id=foo')
        'div#foo'
        >>> compile_selector('span', 'class="a b"')
        'span.a.b'

    """
    try:
        selector = tag.strip()
        if not attrs.strip():
            return selector

        for token in tokenize_attrs(attrs):
            selector += _emit(token)
        return selector
    except Exception as e:
        logger.warning(f'Could not compile selector from tag={tag!r} attrs={attrs!r}: {e}')
        return INVALID_SELECTOR


def compile_descriptor(descriptor: ContainerDescriptor) -> str:
    """Compile any descriptor model into a CSS selector."""
    return compile_selector(descriptor.tag, descriptor.attrs)


def _is_plain_name(name: str) -> bool:
    # usable both as a descriptor key and as a CSS identifier
    return bool(name) and (name[0].isalpha() or name[0] == '_') and all(ch in _KEY_CHARS for ch in name)


def _render_attr_value(value: str) -> str | None:
    if any(ch in value for ch in _UNREPRESENTABLE):
        return None
    if not any(ch.isspace() or ch == ',' or ch in _QUOTES for ch in value):
        return value
    if '"' not in value:
        return f'"{value}"'
    if "'" not in value:
        return f"'{value}'"
    return None


def describe_element(element: Tag) -> ContainerDescriptor:
    """Build a descriptor from an element picked in the sample document.

    Empty values, ``id``, ``style`` and ``on*`` event handlers are left out.
    Values containing whitespace, commas or quotes are quoted so that they
    survive tokenizing. Attributes the descriptor grammar cannot carry are
    dropped: names outside ``[A-Za-z0-9_-]`` (``xml:lang``, ``@click``),
    values holding both quote characters, backslashes or line breaks, and
    class lists with tokens that are not CSS identifiers. The result may be
    looser than the element but always matches it.

    Args:
        element: The picked BeautifulSoup element

    Returns:
        ContainerDescriptor for the element.

    """
    parts: list[str] = []
    for name, raw_value in element.attrs.items():
        key = name.lower()
        # bs4 returns multi-valued attributes such as class as lists
        value = ' '.join(raw_value) if isinstance(raw_value, list) else str(raw_value)
        if not value or key in _SKIPPED_ATTRIBUTES or key.startswith('on') or not _is_plain_name(key):
            continue
        if key == 'class' and not all(_is_plain_name(c.lstrip('-')) for c in value.split()):
            continue

        rendered = _render_attr_value(value)
        if rendered is None:
            logger.debug(f'Leaving {key!r} out of the descriptor for <{element.name}>: value cannot be expressed')
            continue
        parts.append(f'{key}={rendered}')

    return ContainerDescriptor(tag=element.name.lower(), attrs=', '.join(parts))
