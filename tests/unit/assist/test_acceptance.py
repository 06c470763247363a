import pytest

from scrapeforge.assist import (
    FieldSuggestion,
    FieldSuggestions,
    LinkFilterVerdict,
    NextButtonSuggestion,
    accept_field_suggestions,
    accept_link_filter,
    accept_next_button,
    accept_url_advice,
    sanitize_field_name,
    split_page_pattern,
)
from scrapeforge.exceptions import SuggestionError, SuggestionRejected


@pytest.mark.parametrize(
    ('pattern', 'expected'),
    [
        ('https://shop.example.com/list?page={page}', ('https://shop.example.com/list?page=', '')),
        ('https://shop.example.com/p/{page}/index.html', ('https://shop.example.com/p/', '/index.html')),
        ('  `https://e.com/{page}?a=1`\n', ('https://e.com/', '?a=1')),
    ],
)
def test_split_page_pattern(pattern, expected):
    assert split_page_pattern(pattern) == expected


@pytest.mark.parametrize('pattern', ['https://e.com/page/2', None, 42, ['{page}']])
def test_split_page_pattern_rejects_answers_without_placeholder(pattern):
    with pytest.raises(SuggestionRejected):
        split_page_pattern(pattern)


def test_rejection_is_a_suggestion_error():
    with pytest.raises(SuggestionError, match='Expected a URL containing'):
        split_page_pattern('nope')


def test_sanitize_field_name():
    assert sanitize_field_name('product title') == 'product_title'
    assert sanitize_field_name('  price ($) ') == 'price'
    assert sanitize_field_name('') == 'unnamed_field'


def test_accept_field_suggestions_from_list_of_dicts():
    fields = accept_field_suggestions(
        [
            {'name': 'Product Title', 'tag': 'h2', 'attrs': 'class=title'},
            {'name': 'price', 'tag': 'span'},
        ]
    )

    assert [(f.name, f.tag, f.attrs) for f in fields] == [('Product_Title', 'h2', 'class=title'), ('price', 'span', '')]
    assert fields[0].id != fields[1].id


def test_accept_field_suggestions_from_wrapped_shapes():
    wrapped = FieldSuggestions(fields=[FieldSuggestion(name='title', tag='h2')])

    assert accept_field_suggestions(wrapped)[0].name == 'title'
    assert accept_field_suggestions({'fields': [{'name': 'title', 'tag': 'h2'}]})[0].tag == 'h2'
    assert accept_field_suggestions('[{"name": "title", "tag": "h2"}]')[0].name == 'title'


def test_accept_field_suggestions_drops_tagless_entries():
    fields = accept_field_suggestions([{'name': 'a', 'tag': ' '}, {'name': 'b', 'tag': 'p'}])

    assert [f.name for f in fields] == ['b']


@pytest.mark.parametrize(
    'raw',
    [
        'not json',
        {'name': 'title', 'tag': 'h2'},
        [{'name': 'title'}],
        [{'name': 'a', 'tag': ''}],
        [],
        None,
    ],
)
def test_accept_field_suggestions_rejects_malformed_answers(raw):
    with pytest.raises(SuggestionRejected):
        accept_field_suggestions(raw)


def test_accept_url_advice():
    advice = accept_url_advice({'recommendation': 'browser', 'reason': 'Content is rendered by JavaScript.'})

    assert advice.recommendation == 'browser'


@pytest.mark.parametrize('raw', [{'recommendation': 'maybe', 'reason': 'x'}, {'reason': 'x'}, 'static'])
def test_accept_url_advice_rejects_unknown_shapes(raw):
    with pytest.raises(SuggestionRejected):
        accept_url_advice(raw)


def test_accept_next_button_shapes():
    assert accept_next_button(' li.next > a ') == 'li.next > a'
    assert accept_next_button({'selector': 'a.next'}) == 'a.next'
    assert accept_next_button(NextButtonSuggestion(selector='button#more')) == 'button#more'


@pytest.mark.parametrize('raw', ['', '   ', {'css': 'a.next'}, ['a.next'], None])
def test_accept_next_button_rejects(raw):
    with pytest.raises(SuggestionRejected):
        accept_next_button(raw)


def test_accept_link_filter_dedupes_and_drops_unknown_hrefs():
    accepted = accept_link_filter(['/a', '/b', '/a', '/invented'], known_hrefs={'/a', '/b'})

    assert accepted == ['/a', '/b']


def test_accept_link_filter_shapes():
    assert accept_link_filter(LinkFilterVerdict(accepted_hrefs=['/a'])) == ['/a']
    assert accept_link_filter({'accepted_hrefs': ['/b']}) == ['/b']
    assert accept_link_filter('["/c"]') == ['/c']


@pytest.mark.parametrize('raw', [[1, 2], {'hrefs': ['/a']}, 'nothing'])
def test_accept_link_filter_rejects(raw):
    with pytest.raises(SuggestionRejected):
        accept_link_filter(raw)
