import json

import pytest

from scrapeforge.cli import load_job, main
from scrapeforge.exceptions import JobConfigError


@pytest.fixture(autouse=True)
def no_file_logging(mocker):
    mocker.patch('scrapeforge.cli.setup_local_logging')
    mocker.patch('scrapeforge.cli.load_dotenv')


@pytest.fixture
def page_file(tmp_path, item_list_html):
    path = tmp_path / 'page.html'
    path.write_text(item_list_html, encoding='utf-8')
    return path


@pytest.fixture
def job_file(tmp_path):
    path = tmp_path / 'job.json'
    path.write_text(
        json.dumps(
            {
                'project_name': 'catalogue',
                'target': {'kind': 'static'},
                'origin': {'kind': 'local', 'base_url': 'https://shop.example.com/'},
                'extraction': {
                    'mode': 'structured',
                    'container': {'tag': 'div', 'attrs': 'class=item'},
                    'fields': [{'name': 'title', 'tag': 'h2'}],
                },
                'output': {'format': 'json'},
            }
        ),
        encoding='utf-8',
    )
    return path


def test_compile_prints_selector(capsys):
    main(['compile', 'div', 'class="item card", id=main'])

    assert capsys.readouterr().out.strip() == 'div.item.card#main'


def test_test_command_reports_container_matches(page_file, capsys):
    main(['test', '--html', str(page_file), '--kind', 'container', '--tag', 'div', '--attrs', 'class=item'])

    assert 'Found 3 repeating container elements.' in capsys.readouterr().out


def test_test_command_scopes_structured_fields(page_file, capsys):
    main(
        [
            'test',
            '--html',
            str(page_file),
            '--mode',
            'structured',
            '--container-tag',
            'div',
            '--container-attrs',
            'class=item',
            '--tag',
            'h2',
        ]
    )

    assert '2 of 3 containers have a match.' in capsys.readouterr().out


def test_test_command_can_use_the_script_parser(tmp_path, capsys):
    page = tmp_path / 'broken.html'
    page.write_text('<p>Intro<div class="item"><h2>Alpha</h2></div></p>', encoding='utf-8')

    main(['test', '--html', str(page), '--parser', 'html.parser', '--tag', 'div', '--attrs', 'class=item'])

    assert 'Found 1 total matches.' in capsys.readouterr().out


def test_test_command_exits_with_2_on_no_match(page_file):
    with pytest.raises(SystemExit) as exc_info:
        main(['test', '--html', str(page_file), '--tag', 'table'])

    assert exc_info.value.code == 2


def test_links_command(page_file, capsys):
    main(['links', '--html', str(page_file), '--base-url', 'https://shop.example.com/'])

    out = capsys.readouterr().out
    assert 'Links (4)' in out
    assert 'https://shop.example.com/items/alpha' in out


def test_generate_prints_script(job_file, capsys):
    main(['generate', '--job', str(job_file)])

    out = capsys.readouterr().out
    assert 'folder_name = "catalogue"' in out
    assert 'urljoin' not in out
    assert 'container_selector = "div.item"' in out


def test_generate_writes_output_file(job_file, tmp_path):
    target = tmp_path / 'scraper.py'

    main(['generate', '--job', str(job_file), '--output', str(target)])

    script = target.read_text(encoding='utf-8')
    compile(script, str(target), 'exec')
    assert 'output.json' in script


def test_missing_job_file_exits_with_1(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(['generate', '--job', str(tmp_path / 'missing.json')])

    assert exc_info.value.code == 1
    assert 'cannot read' in ' '.join(capsys.readouterr().out.split())


def test_load_job_rejects_invalid_json(tmp_path):
    path = tmp_path / 'job.json'
    path.write_text('{"target": ', encoding='utf-8')

    with pytest.raises(JobConfigError, match='not valid JSON'):
        load_job(str(path))


def test_load_job_reports_first_validation_error(tmp_path):
    path = tmp_path / 'job.json'
    path.write_text(json.dumps({'target': {'kind': 'carrier-pigeon'}}), encoding='utf-8')

    with pytest.raises(JobConfigError) as exc_info:
        load_job(str(path))

    assert exc_info.value.source == str(path)
    assert exc_info.value.reason.startswith('target')
