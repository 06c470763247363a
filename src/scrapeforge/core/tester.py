"""Tests compiled selectors against the sample document."""

import logging
from dataclasses import dataclass

from rich.console import Console
from rich.markup import escape

from scrapeforge.core.compiler import compile_descriptor, compile_selector
from scrapeforge.core.document import SampleDocument
from scrapeforge.models import ContainerDescriptor, DescriptorKind, MatchReport, ScrapingMode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScopeContext:
    """What a field test is scoped to.

    Attributes:
        mode: Current extraction mode
        container: Container the field must be found in (the link container
            for link fields), or None when the field is tested page-wide

    """

    mode: ScrapingMode = 'simple'
    container: ContainerDescriptor | None = None


class SelectorTester:
    """Evaluates descriptors against a sample document and reports match statistics.

    Every outcome, including malformed selectors, is reported through a
    MatchReport; nothing is raised to the caller.

    Attributes:
        document: Sample document the selectors are run against
        console: Optional Rich console for output
        PREVIEW_ITEMS: How many matches a page-wide preview shows
        PREVIEW_CHARS: Maximum characters kept per previewed match

    """

    PREVIEW_ITEMS = 3
    PREVIEW_CHARS = 20

    def __init__(self, document: SampleDocument, console: Console | None = None):
        """Initialize the tester.

        Args:
            document: Sample document to test against
            console: Optional Rich console for output. Defaults to None (silent).

        """
        self.document = document
        self.console = console

    def test(
        self,
        kind: DescriptorKind,
        tag: str,
        attrs: str,
        scope: ScopeContext | None = None,
    ) -> MatchReport:
        """Test one descriptor.

        Args:
            kind: 'container', 'field', 'link_container' or 'link_field'
            tag: Descriptor tag
            attrs: Descriptor attrs string
            scope: Mode and container for field tests. Defaults to a page-wide scope.

        Returns:
            MatchReport describing the outcome.

        """
        scope = scope or ScopeContext()

        if not tag.strip():
            report = MatchReport(status='empty_tag', preview='HTML Tag is empty.')
            self._print_report(kind, report)
            return report

        selector = compile_selector(tag, attrs)

        try:
            if kind in ('container', 'link_container'):
                report = self._test_container(selector)
            elif kind == 'link_field' or scope.mode == 'structured':
                report = self._test_within_containers(selector, scope.container)
            else:
                report = self._test_page_wide(selector)
        except Exception as e:
            logger.info(f'Selector {selector!r} rejected by the document engine: {e}')
            report = MatchReport(
                status='selector_invalid',
                preview='Invalid Tag or Attributes for testing.',
                selector=selector,
            )

        self._print_report(kind, report)
        return report

    def _test_container(self, selector: str) -> MatchReport:
        count = len(self.document.select(selector))
        return MatchReport(
            count=count,
            preview=f'Found {count} repeating container elements.',
            status='ok' if count else 'no_match',
            selector=selector,
        )

    def _test_within_containers(self, selector: str, container: ContainerDescriptor | None) -> MatchReport:
        if container is None or not container.has_tag:
            return MatchReport(
                status='container_unresolved',
                preview='Define and test a container before testing fields.',
                selector=selector,
            )

        containers = self.document.select(compile_descriptor(container))
        if not containers:
            return MatchReport(
                status='container_unresolved',
                preview='No containers found to test within.',
                selector=selector,
                total_containers=0,
            )

        count = sum(1 for element in containers if self.document.select_one(selector, scope=element) is not None)
        return MatchReport(
            count=count,
            preview=f'{count} of {len(containers)} containers have a match.',
            status='ok' if count else 'no_match',
            selector=selector,
            total_containers=len(containers),
        )

    def _test_page_wide(self, selector: str) -> MatchReport:
        matches = self.document.select(selector)
        count = len(matches)
        if not count:
            return MatchReport(preview='Found 0 total matches.', status='no_match', selector=selector)

        texts = [self._truncate(self.document.text_of(el)) for el in matches[: self.PREVIEW_ITEMS]]
        texts = [text for text in texts if text]
        if texts:
            preview = f'Found {count} total matches. Preview: ' + ' | '.join(texts)
        else:
            preview = f'Found {count} total matches. (no text content)'

        return MatchReport(count=count, preview=preview, status='ok', selector=selector)

    def _truncate(self, text: str) -> str:
        if len(text) <= self.PREVIEW_CHARS:
            return text
        return text[: self.PREVIEW_CHARS] + '...'

    def _print_report(self, kind: DescriptorKind, report: MatchReport) -> None:
        if not self.console:
            return

        label = kind.replace('_', ' ')
        if report.is_error:
            self.console.print(f'  ✗ {label}: {escape(report.preview)} ({report.status})')
        else:
            self.console.print(f'  ✓ {label}: {escape(report.preview)}')
