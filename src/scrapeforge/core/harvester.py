"""Harvests hyperlink candidates from the sample document.

Both strategies rebuild their whole result from scratch on every call. Any
selection flags a caller applied to a previous result are not carried over;
re-apply them with apply_link_filter().
"""

import logging
from collections.abc import Iterable
from urllib.parse import urljoin

from bs4 import Tag

from scrapeforge.core.document import SampleDocument
from scrapeforge.models import LinkCandidate

logger = logging.getLogger(__name__)


def _resolve(href: str, base_url: str | None) -> tuple[str, str | None]:
    """Resolve an href against the base URL.

    Returns:
        Tuple of (href, warning). On failure the raw href is returned together
        with a warning message.

    """
    if not base_url:
        return href, None
    try:
        return urljoin(base_url, href), None
    except ValueError as e:
        logger.warning(f'Could not resolve {href!r} against {base_url!r}: {e}')
        return href, f'unresolved: {e}'


def _candidate(document: SampleDocument, anchor: Tag, base_url: str | None) -> LinkCandidate | None:
    raw_href = document.attribute(anchor, 'href').strip()
    if not raw_href:
        return None
    href, warning = _resolve(raw_href, base_url)
    return LinkCandidate(text=document.text_of(anchor), href=href, warning=warning)


def harvest_all_links(document: SampleDocument, base_url: str | None = None) -> list[LinkCandidate]:
    """Collect every anchor with a non-empty href.

    Args:
        document: Sample document
        base_url: URL the document was captured from, used to absolutize hrefs

    Returns:
        One selected LinkCandidate per anchor, in document order.

    """
    candidates = []
    for anchor in document.select('a[href]'):
        candidate = _candidate(document, anchor, base_url)
        if candidate is not None:
            candidates.append(candidate)
    return candidates


def harvest_container_links(
    document: SampleDocument,
    container_selector: str,
    link_selector: str,
    base_url: str | None = None,
) -> list[LinkCandidate]:
    """Collect the first matching link inside each container.

    Containers without a match, or whose first match carries no href, are
    skipped. Malformed selectors produce an empty result.

    Args:
        document: Sample document
        container_selector: Compiled CSS selector of the repeating container
        link_selector: Compiled CSS selector of the link inside a container
        base_url: URL the document was captured from, used to absolutize hrefs

    Returns:
        At most one LinkCandidate per container, in document order.

    """
    try:
        containers = document.select(container_selector)
        anchors = [document.select_one(link_selector, scope=container) for container in containers]
    except Exception as e:
        logger.info(f'Link harvesting skipped, selector rejected ({container_selector!r}, {link_selector!r}): {e}')
        return []

    candidates = []
    for anchor in anchors:
        if anchor is None:
            continue
        candidate = _candidate(document, anchor, base_url)
        if candidate is not None:
            candidates.append(candidate)
    return candidates


def apply_link_filter(candidates: list[LinkCandidate], accepted_hrefs: Iterable[str]) -> list[LinkCandidate]:
    """Recompute the selection flags from a set of accepted hrefs.

    Args:
        candidates: Freshly harvested candidates
        accepted_hrefs: Hrefs to keep selected (e.g. from an AI link filter)

    Returns:
        New list of candidates; the input list is left untouched.

    """
    accepted = set(accepted_hrefs)
    return [candidate.model_copy(update={'selected': candidate.href in accepted}) for candidate in candidates]
