"""
cli.py
=======
Command line entry point: compile descriptors, test them against a saved page,
harvest links and generate scraping scripts from job files.
"""

import argparse
import json
import os
import sys
from pathlib import Path

import logfire
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from scrapeforge.core import (
    SampleDocument,
    ScopeContext,
    SelectorTester,
    compile_selector,
    harvest_all_links,
    harvest_container_links,
)
from scrapeforge.exceptions import JobConfigError, ScrapeForgeError
from scrapeforge.models import ContainerDescriptor, ScraperJob
from scrapeforge.synthesis import synthesize_job
from scrapeforge.utils.logging import setup_local_logging

THEME = Theme(
    {
        'info': 'dim cyan',
        'warning': 'magenta',
        'danger': 'bold red',
        'success': 'bold green',
        'step': 'bold blue',
    }
)


def _read_text(path: str, source: str = 'cli') -> str:
    try:
        return Path(path).read_text(encoding='utf-8')
    except OSError as e:
        raise JobConfigError(source, f'cannot read {path}: {e.strerror or e}') from e


def load_job(path: str) -> ScraperJob:
    """Read and validate a JSON job file.

    Args:
        path: Path to the job file

    Returns:
        The validated ScraperJob.

    Raises:
        JobConfigError: If the file is missing, is not JSON or does not describe a valid job.

    """
    raw = _read_text(path, source=path)
    try:
        return ScraperJob.model_validate(json.loads(raw))
    except json.JSONDecodeError as e:
        raise JobConfigError(path, f'not valid JSON ({e.msg} at line {e.lineno})') from e
    except ValidationError as e:
        first = e.errors()[0]
        location = '.'.join(str(part) for part in first['loc']) or 'job'
        raise JobConfigError(path, f'{location}: {first["msg"]}') from e


def load_document(path: str, parser: str = 'lxml') -> SampleDocument:
    """Parse a saved HTML page into a SampleDocument."""
    return SampleDocument.from_html(_read_text(path), parser=parser)


def cmd_compile(args: argparse.Namespace, console: Console) -> int:
    """Print the CSS selector for a descriptor."""
    console.print(compile_selector(args.tag, args.attrs), markup=False, highlight=False)
    return 0


def cmd_test(args: argparse.Namespace, console: Console) -> int:
    """Test one descriptor against a saved page."""
    document = load_document(args.html, args.parser)
    kind = args.kind.replace('-', '_')

    container = None
    if args.container_tag:
        container = ContainerDescriptor(tag=args.container_tag, attrs=args.container_attrs)
    mode = 'links' if kind == 'link_field' else args.mode

    console.print(f'[step]Testing {escape(compile_selector(args.tag, args.attrs))}[/step]')
    report = SelectorTester(document, console=console).test(kind, args.tag, args.attrs, ScopeContext(mode, container))
    logfire.info('Descriptor tested', kind=kind, status=report.status, count=report.count)
    return 0 if not report.is_error else 2


def cmd_links(args: argparse.Namespace, console: Console) -> int:
    """Print the link candidates of a saved page."""
    document = load_document(args.html, args.parser)

    if args.container_tag:
        candidates = harvest_container_links(
            document,
            compile_selector(args.container_tag, args.container_attrs),
            compile_selector(args.link_tag, args.link_attrs),
            base_url=args.base_url,
        )
    else:
        candidates = harvest_all_links(document, base_url=args.base_url)

    table = Table(title=f'Links ({len(candidates)})')
    table.add_column('#', style='dim', justify='right')
    table.add_column('Text', style='cyan')
    table.add_column('Href', style='green')
    table.add_column('Warning', style='magenta')
    for index, candidate in enumerate(candidates, 1):
        table.add_row(str(index), escape(candidate.text), escape(candidate.href), escape(candidate.warning or ''))
    console.print(table)
    return 0


def cmd_generate(args: argparse.Namespace, console: Console) -> int:
    """Generate a scraping script from a job file."""
    job = load_job(args.job)

    with logfire.span('generate', job=args.job, output=args.output):
        script = synthesize_job(job, capture_only=args.capture_only)

    if args.output:
        try:
            Path(args.output).write_text(script, encoding='utf-8')
        except OSError as e:
            raise JobConfigError('cli', f'cannot write {args.output}: {e.strerror or e}') from e
        console.print(f'[success]✓ Script written to {escape(args.output)}[/success]')
    else:
        console.print(script, markup=False, highlight=False, soft_wrap=True)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog='scrapeforge',
        description='Define extraction rules, test them on a saved page and generate scraping scripts',
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    compile_parser = subparsers.add_parser('compile', help='Print the CSS selector for a tag and attributes')
    compile_parser.add_argument('tag', help='HTML tag, e.g. div')
    compile_parser.add_argument('attrs', nargs='?', default='', help='Attributes, e.g. \'class="item", data-id=4\'')
    compile_parser.set_defaults(handler=cmd_compile)

    test_parser = subparsers.add_parser('test', help='Test a descriptor against a saved HTML page')
    test_parser.add_argument('--html', required=True, help='Saved HTML page')
    test_parser.add_argument(
        '--parser',
        choices=['lxml', 'html.parser'],
        default='lxml',
        help='HTML parser; generated scripts use html.parser (default: lxml)',
    )
    test_parser.add_argument(
        '--kind',
        choices=['container', 'field', 'link-container', 'link-field'],
        default='field',
        help='What the descriptor describes (default: field)',
    )
    test_parser.add_argument('--tag', required=True, help='HTML tag')
    test_parser.add_argument('--attrs', default='', help='Attributes')
    test_parser.add_argument(
        '--mode',
        choices=['structured', 'simple', 'links'],
        default='simple',
        help='Extraction mode; structured fields are tested inside the container (default: simple)',
    )
    test_parser.add_argument('--container-tag', default='', help='Container tag for structured fields and link fields')
    test_parser.add_argument('--container-attrs', default='', help='Container attributes')
    test_parser.set_defaults(handler=cmd_test)

    links_parser = subparsers.add_parser('links', help='List the links of a saved HTML page')
    links_parser.add_argument('--html', required=True, help='Saved HTML page')
    links_parser.add_argument(
        '--parser',
        choices=['lxml', 'html.parser'],
        default='lxml',
        help='HTML parser; generated scripts use html.parser (default: lxml)',
    )
    links_parser.add_argument('--base-url', default=None, help='URL the page was saved from')
    links_parser.add_argument('--container-tag', default='', help='Take the first link inside each of these containers')
    links_parser.add_argument('--container-attrs', default='', help='Container attributes')
    links_parser.add_argument('--link-tag', default='a', help='Link tag inside a container (default: a)')
    links_parser.add_argument('--link-attrs', default='', help='Link attributes')
    links_parser.set_defaults(handler=cmd_links)

    generate_parser = subparsers.add_parser('generate', help='Generate a scraping script from a JSON job file')
    generate_parser.add_argument('--job', required=True, help='JSON job file')
    generate_parser.add_argument('--output', default=None, help='Write the script here instead of printing it')
    generate_parser.add_argument(
        '--capture-only',
        action='store_true',
        help='Browser targets only: save page markup without extracting',
    )
    generate_parser.set_defaults(handler=cmd_generate)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    load_dotenv()

    console = Console(theme=THEME)
    args = build_parser().parse_args(argv)

    setup_local_logging(os.getenv('SCRAPEFORGE_LOG_LEVEL', 'INFO'))

    logfire_token = os.getenv('LOGFIRE_TOKEN')
    if logfire_token:
        logfire.configure(token=logfire_token, console=False)

    try:
        exit_code = args.handler(args, console)
    except ScrapeForgeError as e:
        logfire.error('Command failed', command=args.command, error=str(e))
        console.print(f'[danger]✗ {escape(str(e))}[/danger]')
        sys.exit(1)

    if exit_code:
        sys.exit(exit_code)


if __name__ == '__main__':
    main()
