import pytest

from scrapeforge.core import ExtractionSession, SelectorTester
from scrapeforge.models import ExtractionConfig, FieldDescriptor


@pytest.fixture
def tester(item_document):
    return SelectorTester(item_document)


def test_default_session_has_one_structured_field():
    session = ExtractionSession()

    assert session.config.mode == 'structured'
    assert len(session.config.fields) == 1
    assert session.config.fields[0].name == 'item_1'


def test_add_and_remove_fields():
    session = ExtractionSession()
    second = session.add_field()

    assert second.name == 'item_2'
    assert session.remove_field(second.id) is True
    assert session.remove_field(session.config.fields[0].id) is False
    assert len(session.config.fields) == 1


def test_container_test_sets_ready_flag(tester):
    session = ExtractionSession()
    session.edit_container(tag='div', attrs='class=item')

    report = session.test_container(tester)

    assert report.count == 3
    assert session.container_ready is True
    assert session.choose_extraction_method('manual') is True


def test_failed_container_test_resets_method(tester):
    session = ExtractionSession()
    session.edit_container(tag='div', attrs='class=item')
    session.test_container(tester)
    session.choose_extraction_method('auto')

    session.edit_container(tag='div[')
    report = session.test_container(tester)

    assert report.status == 'selector_invalid'
    assert session.container_ready is False
    assert session.extraction_method is None


def test_method_requires_ready_container():
    session = ExtractionSession()

    assert session.choose_extraction_method('auto') is False
    assert session.extraction_method is None


def test_editing_a_field_drops_its_result(tester):
    session = ExtractionSession(ExtractionConfig(mode='simple', fields=[FieldDescriptor(name='title', tag='h2')]))
    field_id = session.config.fields[0].id

    session.test_field(tester, field_id)
    assert session.result_for(field_id) is not None

    updated = session.edit_field(field_id, tag='h3')
    assert updated.id == field_id
    assert updated.tag == 'h3'
    assert session.result_for(field_id) is None


def test_edit_unknown_field_raises():
    with pytest.raises(KeyError):
        ExtractionSession().edit_field('missing', tag='p')


def test_structured_field_test_uses_container_scope(tester):
    session = ExtractionSession()
    session.edit_container(tag='div', attrs='class=item')
    field_id = session.config.fields[0].id
    session.edit_field(field_id, tag='h2', name='title')

    report = session.test_field(tester, field_id)

    assert report.preview == '2 of 3 containers have a match.'


def test_editing_the_container_drops_scoped_field_reports(tester):
    session = ExtractionSession()
    session.edit_container(tag='div', attrs='class=item')
    field_id = session.config.fields[0].id
    session.edit_field(field_id, tag='h2', name='title')
    session.test_field(tester, field_id)

    session.edit_container(tag='section')

    assert session.result_for(field_id) is None


def test_editing_the_container_keeps_unscoped_field_reports(tester):
    session = ExtractionSession(ExtractionConfig(mode='simple', fields=[FieldDescriptor(name='a', tag='h2')]))
    field_id = session.config.fields[0].id
    session.test_field(tester, field_id)

    session.edit_container(tag='section')

    assert session.result_for(field_id).count == 2


def test_editing_the_link_container_drops_link_field_report(tester):
    session = ExtractionSession(ExtractionConfig(mode='links', link_strategy='container'))
    session.edit_link_container(tag='div', attrs='class=item')
    session.edit_link_selector(attrs='class=more')
    session.test_link_field(tester)

    session.edit_link_container(tag='li')

    assert session.result_for('link_field') is None
    assert session.link_container_ready is False


def test_results_are_keyed_by_id_not_position(tester):
    session = ExtractionSession(ExtractionConfig(mode='simple', fields=[FieldDescriptor(name='a', tag='h2')]))
    first_id = session.config.fields[0].id
    second = session.add_field('b')
    session.edit_field(second.id, tag='span', attrs='class=price')

    session.test_field(tester, first_id)
    session.test_field(tester, second.id)
    session.remove_field(first_id)

    assert session.result_for(first_id) is None
    assert session.result_for(second.id).count == 2


def test_switch_mode_discards_everything(tester):
    session = ExtractionSession()
    session.edit_container(tag='div', attrs='class=item')
    session.test_container(tester)

    session.switch_mode('links')

    assert session.config.mode == 'links'
    assert session.container_ready is False
    assert session.container_result is None
    assert session.results == {}


def test_link_container_and_link_field(tester):
    session = ExtractionSession(ExtractionConfig(mode='links', link_strategy='container'))
    session.edit_link_container(tag='div', attrs='class=item')
    session.edit_link_selector(attrs='class=more')

    assert session.test_link_container(tester).count == 3
    assert session.link_container_ready is True
    assert session.test_link_field(tester).preview == '2 of 3 containers have a match.'
    assert session.result_for('link_field') is not None

    session.edit_link_selector(tag='a')
    assert session.result_for('link_field') is None


def test_apply_field_suggestions_switches_to_manual():
    session = ExtractionSession()
    session.apply_field_suggestions([FieldDescriptor(name='title', tag='h2')])

    assert session.extraction_method == 'manual'
    assert [f.name for f in session.config.fields] == ['title']
