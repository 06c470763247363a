from rich.console import Console

from scrapeforge.core import SampleDocument, ScopeContext, SelectorTester
from scrapeforge.models import ContainerDescriptor

ITEM_CONTAINER = ContainerDescriptor(tag='div', attrs='class=item')


def test_empty_tag_is_reported_without_querying(item_document, mocker):
    select = mocker.spy(item_document, 'select')
    report = SelectorTester(item_document).test('field', '   ', 'class=x')

    assert report.status == 'empty_tag'
    assert report.preview == 'HTML Tag is empty.'
    assert report.is_error
    select.assert_not_called()


def test_container_counts_matches(item_document):
    report = SelectorTester(item_document).test('container', 'div', 'class=item')

    assert report.status == 'ok'
    assert report.count == 3
    assert report.preview == 'Found 3 repeating container elements.'
    assert report.selector == 'div.item'


def test_container_without_matches_is_an_error(item_document):
    report = SelectorTester(item_document).test('container', 'section', '')

    assert report.status == 'no_match'
    assert report.count == 0
    assert report.preview == 'Found 0 repeating container elements.'


def test_structured_field_counts_containers_with_a_match(item_document):
    scope = ScopeContext(mode='structured', container=ITEM_CONTAINER)
    report = SelectorTester(item_document).test('field', 'h2', '', scope)

    assert report.status == 'ok'
    assert report.count == 2
    assert report.total_containers == 3
    assert report.preview == '2 of 3 containers have a match.'


def test_structured_field_count_never_exceeds_container_count(item_document):
    scope = ScopeContext(mode='structured', container=ITEM_CONTAINER)
    # Every container holds several matching descendants
    report = SelectorTester(item_document).test('field', '*', '', scope)

    assert report.count <= report.total_containers


def test_structured_field_without_containers_is_distinct_from_no_match(item_document):
    scope = ScopeContext(mode='structured', container=ContainerDescriptor(tag='article'))
    report = SelectorTester(item_document).test('field', 'h2', '', scope)

    assert report.status == 'container_unresolved'
    assert report.preview == 'No containers found to test within.'
    assert report.total_containers == 0


def test_structured_field_with_containers_but_no_match(item_document):
    scope = ScopeContext(mode='structured', container=ITEM_CONTAINER)
    report = SelectorTester(item_document).test('field', 'h5', '', scope)

    assert report.status == 'no_match'
    assert report.preview == '0 of 3 containers have a match.'


def test_structured_field_without_container_tag(item_document):
    scope = ScopeContext(mode='structured', container=ContainerDescriptor())
    report = SelectorTester(item_document).test('field', 'h2', '', scope)

    assert report.status == 'container_unresolved'


def test_link_field_is_scoped_to_link_container(item_document):
    scope = ScopeContext(mode='links', container=ITEM_CONTAINER)
    report = SelectorTester(item_document).test('link_field', 'a', 'class=more', scope)

    assert report.preview == '2 of 3 containers have a match.'


def test_simple_field_previews_page_wide_matches(item_document):
    report = SelectorTester(item_document).test('field', 'h2', '')

    assert report.status == 'ok'
    assert report.count == 2
    assert report.preview == 'Found 2 total matches. Preview: Alpha | Beta'


def test_preview_is_limited_and_truncated():
    html = '<ul>' + ''.join(f'<li>Entry number {i} with a long label</li>' for i in range(5)) + '</ul>'
    report = SelectorTester(SampleDocument.from_html(html)).test('field', 'li', '')

    assert report.count == 5
    assert report.preview == (
        'Found 5 total matches. Preview: Entry number 0 with ... | Entry number 1 with ... | Entry number 2 with ...'
    )


def test_preview_of_matches_without_text():
    report = SelectorTester(SampleDocument.from_html('<div><img src="a.png"><img src="b.png"></div>')).test(
        'field', 'img', ''
    )

    assert report.preview == 'Found 2 total matches. (no text content)'


def test_page_wide_zero_matches(item_document):
    report = SelectorTester(item_document).test('field', 'table', '')

    assert report.status == 'no_match'
    assert report.preview == 'Found 0 total matches.'


def test_malformed_selector_is_reported(item_document):
    report = SelectorTester(item_document).test('field', 'div[', '')

    assert report.status == 'selector_invalid'
    assert report.preview == 'Invalid Tag or Attributes for testing.'


def test_retesting_gives_the_same_report(item_document):
    tester = SelectorTester(item_document)
    scope = ScopeContext(mode='structured', container=ITEM_CONTAINER)

    assert tester.test('field', 'h2', '', scope) == tester.test('field', 'h2', '', scope)


def test_console_output_marks_errors(item_document):
    console = Console(record=True, width=200)
    tester = SelectorTester(item_document, console=console)

    tester.test('container', 'div', 'class=item')
    tester.test('container', 'section', '')

    output = console.export_text()
    assert '✓ container: Found 3 repeating container elements.' in output
    assert '✗ container: Found 0 repeating container elements. (no_match)' in output
