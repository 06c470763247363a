import pytest
from pydantic import ValidationError

from scrapeforge.models import (
    DEFAULT_PROJECT_NAME,
    ContainerDescriptor,
    ExtractionConfig,
    FieldDescriptor,
    InteractiveBrowser,
    LinkCandidate,
    LocalFiles,
    MatchReport,
    NetworkConfig,
    PaginationConfig,
    ScraperJob,
    StaticFetch,
    clean_project_name,
)


def test_field_names_must_be_identifier_safe():
    with pytest.raises(ValidationError):
        FieldDescriptor(name='bad name')


def test_field_ids_are_unique():
    assert FieldDescriptor().id != FieldDescriptor().id


def test_tag_is_stripped():
    assert ContainerDescriptor(tag='  div ').tag == 'div'
    assert not ContainerDescriptor(tag='   ').has_tag


@pytest.mark.parametrize(
    ('config', 'missing'),
    [
        (ExtractionConfig(mode='structured'), ['a container tag', 'at least one field']),
        (
            ExtractionConfig(mode='structured', container=ContainerDescriptor(tag='div'), fields=[FieldDescriptor()]),
            ["an HTML tag for field 'item_1'"],
        ),
        (ExtractionConfig(mode='simple'), ['an HTML tag for the field to extract']),
        (ExtractionConfig(mode='links'), []),
        (
            ExtractionConfig(mode='links', link_strategy='container', link_selector=ContainerDescriptor()),
            ['a link container tag', 'a link tag'],
        ),
    ],
)
def test_missing_parts(config, missing):
    assert config.missing_parts() == missing
    assert config.is_complete is (not missing)


def test_pagination_helpers():
    pagination = PaginationConfig(scope='multi', mode='url', start_page=3, page_count=4)

    assert pagination.uses_url_pattern
    assert not pagination.uses_next_button
    assert pagination.end_page == 7


def test_pagination_rejects_non_positive_counts():
    with pytest.raises(ValidationError):
        PaginationConfig(page_count=0)


def test_proxies_accept_multiline_text():
    network = NetworkConfig(proxies='10.0.0.1:8080\n\n  10.0.0.2:3128  \n')

    assert network.proxies == ['10.0.0.1:8080', '10.0.0.2:3128']


def test_delay_is_converted_exactly():
    assert NetworkConfig(request_delay_ms=1500).delay_seconds == 1.5
    assert NetworkConfig(request_delay_ms=0).delay_seconds == 0


def test_job_discriminates_target_and_origin():
    job = ScraperJob.model_validate(
        {
            'project_name': 'my shop!',
            'target': {'kind': 'browser', 'engine': 'modern'},
            'origin': {'kind': 'local', 'base_url': 'https://example.com'},
        }
    )

    assert job.project_name == 'myshop'
    assert isinstance(job.target, InteractiveBrowser)
    assert job.target.engine == 'modern'
    assert isinstance(job.origin, LocalFiles)
    assert job.origin.base_url == 'https://example.com'


def test_job_defaults():
    job = ScraperJob()

    assert isinstance(job.target, StaticFetch)
    assert job.project_name == 'scraping_project'
    assert job.output.format == 'csv'


@pytest.mark.parametrize(
    ('raw', 'expected'),
    [('my shop!', 'myshop'), ('data_2024-v1', 'data_2024-v1'), ('café', 'caf'), ('../..', DEFAULT_PROJECT_NAME)],
)
def test_clean_project_name(raw, expected):
    assert clean_project_name(raw) == expected
    assert ScraperJob(project_name=raw).project_name == expected


def test_match_report_error_flag():
    assert not MatchReport(status='ok').is_error
    assert MatchReport(status='no_match').is_error


def test_link_candidate_requires_href():
    with pytest.raises(ValidationError):
        LinkCandidate(text='x', href='')
