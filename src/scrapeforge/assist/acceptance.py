"""Structural acceptance of AI answers.

Model answers are untrusted. Every answer is checked against the shape the
caller expects and normalized before it reaches an extraction configuration;
anything else is rejected with SuggestionRejected.
"""

import re
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError

from scrapeforge.assist.models import (
    FieldSuggestion,
    FieldSuggestions,
    LinkFilterVerdict,
    NextButtonSuggestion,
    UrlMethodAdvice,
)
from scrapeforge.exceptions import SuggestionRejected
from scrapeforge.models import FieldDescriptor

PAGE_PLACEHOLDER = '{page}'
UNNAMED_FIELD = 'unnamed_field'

_FIELD_LIST = TypeAdapter(list[FieldSuggestion])
_HREF_LIST = TypeAdapter(list[str])


def _plain(raw: Any) -> Any:
    """Turn pydantic models (and lists of them) into plain data."""
    if isinstance(raw, BaseModel):
        return raw.model_dump()
    if isinstance(raw, list):
        return [_plain(item) for item in raw]
    return raw


def _validate(adapter: TypeAdapter, raw: Any, expected: str) -> Any:
    try:
        if isinstance(raw, str):
            return adapter.validate_json(raw)
        return adapter.validate_python(_plain(raw))
    except ValidationError as e:
        raise SuggestionRejected(expected, raw) from e


def sanitize_field_name(name: str) -> str:
    """Make a suggested name usable as an output column.

    >>> sanitize_field_name('Product Title!')
    'Product_Title'
    >>> sanitize_field_name('???')
    'unnamed_field'
    """
    cleaned = re.sub(r'[^A-Za-z0-9_]+', '_', name.strip()).strip('_')
    return cleaned or UNNAMED_FIELD


def split_page_pattern(pattern: Any) -> tuple[str, str]:
    """Split a URL containing the ``{page}`` placeholder into prefix and suffix.

    Args:
        pattern: Raw answer, expected to be a plain string

    Returns:
        Tuple of (url_prefix, url_suffix).

    Raises:
        SuggestionRejected: If the answer is not a string containing the placeholder.

    """
    if not isinstance(pattern, str) or PAGE_PLACEHOLDER not in pattern:
        raise SuggestionRejected(f'a URL containing {PAGE_PLACEHOLDER}', pattern)
    prefix, _, suffix = pattern.strip().strip('"\'`').partition(PAGE_PLACEHOLDER)
    return prefix, suffix


def accept_url_advice(raw: Any) -> UrlMethodAdvice:
    """Accept a ``{recommendation, reason}`` object."""
    return _validate(TypeAdapter(UrlMethodAdvice), raw, 'an object with recommendation and reason')


def accept_field_suggestions(raw: Any) -> list[FieldDescriptor]:
    """Accept an array of ``{name, tag, attrs}`` objects as field descriptors.

    Names are sanitized; suggestions without a tag are dropped.

    Raises:
        SuggestionRejected: If the shape is wrong or no usable field remains.

    """
    expected = 'a non-empty array of {name, tag, attrs} objects'
    if isinstance(raw, FieldSuggestions):
        raw = raw.fields
    elif isinstance(raw, dict) and 'fields' in raw:
        raw = raw['fields']
    suggestions = _validate(_FIELD_LIST, raw, expected)
    fields = [
        FieldDescriptor(name=sanitize_field_name(s.name), tag=s.tag, attrs=s.attrs)
        for s in suggestions
        if s.tag.strip()
    ]
    if not fields:
        raise SuggestionRejected(expected, raw)
    return fields


def accept_next_button(raw: Any) -> str:
    """Accept a next-page selector given as a string or a ``{selector}`` object."""
    if isinstance(raw, NextButtonSuggestion):
        selector = raw.selector
    elif isinstance(raw, dict) and isinstance(raw.get('selector'), str):
        selector = raw['selector']
    elif isinstance(raw, str):
        selector = raw
    else:
        raise SuggestionRejected('a CSS selector string', raw)

    selector = selector.strip()
    if not selector:
        raise SuggestionRejected('a CSS selector string', raw)
    return selector


def accept_link_filter(raw: Any, known_hrefs: set[str] | None = None) -> list[str]:
    """Accept an array of href strings, or a ``{accepted_hrefs}`` object.

    Args:
        raw: Raw answer
        known_hrefs: If given, hrefs outside this set are dropped

    Returns:
        Accepted hrefs in answer order, without duplicates.

    """
    if isinstance(raw, LinkFilterVerdict):
        raw = raw.accepted_hrefs
    elif isinstance(raw, dict) and 'accepted_hrefs' in raw:
        raw = raw['accepted_hrefs']
    hrefs = _validate(_HREF_LIST, raw, 'an array of href strings')

    accepted: list[str] = []
    for href in hrefs:
        if href in accepted or (known_hrefs is not None and href not in known_hrefs):
            continue
        accepted.append(href)
    return accepted
