"""Scripts that drive a real browser with Selenium (classic) or Playwright (modern)."""

from dataclasses import dataclass

from scrapeforge.models import (
    ExtractionConfig,
    InteractiveBrowser,
    LiveUrl,
    LocalFiles,
    NetworkConfig,
    OutputSpec,
    PaginationConfig,
)
from scrapeforge.synthesis.extraction import render_extraction, render_output
from scrapeforge.synthesis.literals import compose_script, indent, py_number, py_str, py_str_list
from scrapeforge.synthesis.profiles import (
    CUSTOM_BINARY_BROWSERS,
    PLAYWRIGHT_FAMILIES,
    SELENIUM_FAMILIES,
    display_name,
)
from scrapeforge.synthesis.static import render_local_listing


@dataclass(frozen=True)
class PageApi:
    """Expressions a generated script uses to work with the open page.

    Attributes:
        open_page: Statement template navigating to ``{url}``
        page_source: Expression returning the current markup
        page_url: Expression returning the current page URL
        click_next: Statements clicking ``next_button_selector`` or raising
        close: Statements shutting the browser down
        install_hint: pip packages needed by the script

    """

    open_page: str
    page_source: str
    page_url: str
    click_next: tuple[str, ...]
    close: tuple[str, ...]
    install_hint: str


SELENIUM_API = PageApi(
    open_page='driver.get({url})',
    page_source='driver.page_source',
    page_url='driver.current_url',
    click_next=(
        'next_button = driver.find_element(By.CSS_SELECTOR, next_button_selector)',
        'print("Found next page button, clicking...")',
        'next_button.click()',
    ),
    close=('driver.quit()',),
    install_hint='pip install selenium webdriver-manager beautifulsoup4',
)

PLAYWRIGHT_API = PageApi(
    open_page='driver.goto({url})',
    page_source='driver.content()',
    page_url='driver.url',
    click_next=(
        'next_button = driver.locator(next_button_selector).first',
        'print("Found next page button, clicking...")',
        'next_button.click(timeout=5000)',
    ),
    close=('browser.close()', 'playwright.stop()'),
    install_hint='pip install playwright beautifulsoup4 && playwright install',
)


def _proxy_section(network: NetworkConfig) -> list[str]:
    if not network.proxies:
        return []
    return [
        '# --- Proxy Configuration ---',
        f'proxies = {py_str_list(network.proxies)}',
        'chosen_proxy = random.choice(proxies)',
        'print(f"Using proxy: {chosen_proxy}")',
        '',
    ]


def _selenium_setup(network: NetworkConfig) -> tuple[str, set[str]]:
    family = SELENIUM_FAMILIES[network.browser]
    name = display_name(network.browser)
    imports = {'from selenium import webdriver', family.service_import, family.manager_import}

    body = [f'options = webdriver.{family.options_class}()']
    if network.proxies:
        imports.add('import random')
        if network.browser == 'firefox':
            imports.add('from selenium.webdriver.common.proxy import Proxy, ProxyType')
            body.append(
                'options.proxy = Proxy({"proxyType": ProxyType.MANUAL, "httpProxy": chosen_proxy, "sslProxy": chosen_proxy})'
            )
        else:
            body.append('options.add_argument(f"--proxy-server={chosen_proxy}")')
    if network.browser in CUSTOM_BINARY_BROWSERS:
        body.append(f'# For {name}, you might need to specify the binary location if it is not found automatically')
        body.append(f'# options.binary_location = "/path/to/{network.browser}"')
    body.append(f'driver = webdriver.{family.driver_class}(service={family.service_call}, options=options)')

    lines = [
        *_proxy_section(network),
        '# --- Browser Setup ---',
        'try:',
        *(f'    {line}' for line in body),
        'except Exception as e:',
        f'    print(f"Error setting up {name} driver: {{e}}")',
        f'    print("Please ensure {name} is installed on your system.")',
        '    raise SystemExit(1)',
    ]
    return '\n'.join(lines), imports


def _playwright_setup(network: NetworkConfig) -> tuple[str, set[str]]:
    family = PLAYWRIGHT_FAMILIES[network.browser]
    name = display_name(network.browser)
    imports = {'from playwright.sync_api import sync_playwright'}

    launch_args = ['headless=False']
    if family.channel:
        launch_args.append(f'channel={py_str(family.channel)}')
    if network.proxies:
        imports.add('import random')
        launch_args.append('proxy={"server": chosen_proxy}')

    body = []
    if network.browser in CUSTOM_BINARY_BROWSERS:
        body.append(f'# For {name}, pass executable_path="/path/to/{network.browser}" to launch()')
    body.append(f'browser = playwright.{family.launcher}.launch({", ".join(launch_args)})')
    body.append('driver = browser.new_page()')

    lines = [
        *_proxy_section(network),
        '# --- Browser Setup ---',
        'playwright = sync_playwright().start()',
        'try:',
        *(f'    {line}' for line in body),
        'except Exception as e:',
        f'    print(f"Error launching {name}: {{e}}")',
        '    print("Please run \'playwright install\' and make sure the browser is available.")',
        '    playwright.stop()',
        '    raise SystemExit(1)',
    ]
    return '\n'.join(lines), imports


def _capture_function(api: PageApi, extraction: ExtractionConfig | None) -> tuple[str, set[str]]:
    doc = 'Save the current page markup and extract data from it.' if extraction else 'Save the current page markup.'
    lines = [
        'def capture_page(file_name):',
        f'    """{doc}"""',
        f'    html = {api.page_source}',
        '    file_path = os.path.join(folder_name, file_name)',
        '    try:',
        '        with open(file_path, "w", encoding="utf-8") as f:',
        '            f.write(html)',
        '        print(f"Successfully saved page HTML to \'{file_path}\'")',
        '    except OSError as e:',
        '        print(f"Error saving file \'{file_path}\': {e}")',
    ]
    imports: set[str] = set()
    if extraction is not None:
        block = render_extraction(extraction, 'this page', api.page_url)
        imports = {'from bs4 import BeautifulSoup'} | block.imports
        lines += ['', '    soup = BeautifulSoup(html, "html.parser")', indent(block.code)]
    return '\n'.join(lines), imports


def _wait_lines() -> list[str]:
    return [
        'print(f"Waiting for page to load ({REQUEST_DELAY} seconds)...")',
        'time.sleep(REQUEST_DELAY)',
    ]


def _single_page(api: PageApi, pagination: PaginationConfig) -> list[str]:
    return [
        '# The URL to scrape',
        f'url = {py_str(pagination.url)}',
        'print(f"Opening URL: {url}")',
        api.open_page.format(url='url'),
        *_wait_lines(),
        'capture_page("dataset.html")',
    ]


def _button_pages(api: PageApi, pagination: PaginationConfig) -> list[str]:
    return [
        '# The URL to start scraping from',
        f'url = {py_str(pagination.url)}',
        'print(f"Opening URL: {url}")',
        api.open_page.format(url='url'),
        '',
        f'start_page = {pagination.start_page}',
        f'pages_to_scrape = {pagination.page_count}',
        f'next_button_selector = {py_str(pagination.next_selector)}',
        'print(f"\\nStarting scrape of {pages_to_scrape} pages by clicking the \'next\' button...")',
        '',
        'for i in range(pages_to_scrape):',
        '    page_num = start_page + i',
        '    print(f"\\nProcessing page {page_num}...")',
        *indent('\n'.join(_wait_lines())).splitlines(),
        '    capture_page(f"dataset_{page_num}.html")',
        '',
        '    if i == pages_to_scrape - 1:',
        '        print("\\nReached target number of pages.")',
        '        break',
        '',
        '    try:',
        *(f'        {line}' for line in api.click_next),
        '    except Exception as e:',
        '        print(f"Could not find or click the next page button ({e}). Ending scrape.")',
        '        break',
    ]


def _pattern_pages(api: PageApi, pagination: PaginationConfig) -> list[str]:
    return [
        '# Page URLs are built from this prefix and suffix around the page number',
        f'url_prefix = {py_str(pagination.url_prefix)}',
        f'url_suffix = {py_str(pagination.url_suffix)}',
        f'start_page = {pagination.start_page}',
        f'pages_to_scrape = {pagination.page_count}',
        'end_page = start_page + pages_to_scrape',
        'print(f"\\nStarting scrape of {pages_to_scrape} pages using URL pattern...")',
        'print(f"Range: page {start_page} to {end_page - 1}")',
        '',
        'for page_num in range(start_page, end_page):',
        '    current_url = f"{url_prefix}{page_num}{url_suffix}"',
        '    print(f"\\nProcessing page {page_num}: {current_url}")',
        '    try:',
        f'        {api.open_page.format(url="current_url")}',
        '    except Exception as e:',
        '        print(f"    Error opening URL {current_url}: {e}")',
        '        continue',
        *indent('\n'.join(_wait_lines())).splitlines(),
        '    capture_page(f"dataset_{page_num}.html")',
    ]


def _local_pages(api: PageApi, extraction: ExtractionConfig, origin: LocalFiles) -> tuple[list[str], set[str]]:
    base_url_expr = py_str(origin.base_url) if origin.base_url else None
    block = render_extraction(extraction, 'this file', base_url_expr)
    lines = [
        'print(f"Rendering {len(file_names)} file(s) from the \'{folder_name}\' folder...")',
        'for file_name in file_names:',
        '    file_path = Path(folder_name, file_name).resolve()',
        '    print(f"  - Rendering {file_path}")',
        f'    {api.open_page.format(url="file_path.as_uri()")}',
        *indent('\n'.join(_wait_lines())).splitlines(),
        f'    soup = BeautifulSoup({api.page_source}, "html.parser")',
        indent(block.code),
    ]
    imports = {'from pathlib import Path', 'from bs4 import BeautifulSoup'} | block.imports
    return [render_local_listing(), '', *lines], imports


def render_browser_script(
    target: InteractiveBrowser,
    origin: LiveUrl | LocalFiles,
    extraction: ExtractionConfig | None,
    pagination: PaginationConfig,
    network: NetworkConfig,
    output: OutputSpec,
    project_name: str,
) -> str:
    """Browser automation script.

    Live pages are saved to the project folder as ``dataset.html`` or
    ``dataset_<n>.html`` and, when an extraction is given, parsed right after
    capture. Local files are rendered in the browser from ``file://`` URLs and
    extracted from the rendered markup without being saved again.

    Args:
        target: Browser backend with its engine
        origin: Live URLs or saved files
        extraction: Complete extraction, or None for a capture-only script
        pagination: Pages to visit
        network: Proxies, delay and browser profile
        output: Output format
        project_name: Folder the script reads from and writes to

    Returns:
        Python source of the script.

    """
    modern = target.engine == 'modern'
    api = PLAYWRIGHT_API if modern else SELENIUM_API
    setup, imports = _playwright_setup(network) if modern else _selenium_setup(network)
    imports |= {'import os', 'import time'}

    instructions = '\n'.join(
        [
            '# --- Setup Instructions ---',
            '# 1. Make sure you have Python installed.',
            '# 2. Install required libraries:',
            f'#    {api.install_hint}',
        ]
    )
    config_lines = [
        '# --- Configuration ---',
        '# Folder where captured pages and output files are saved',
        f'folder_name = {py_str(project_name)}',
        '# Seconds to wait for pages to load. Increase for slower websites.',
        f'REQUEST_DELAY = {py_number(network.delay_seconds)}',
    ]
    if extraction is not None:
        config_lines += ['# Records extracted from every page', 'all_data = []']

    sections = [instructions, '\n'.join(config_lines), setup]

    if isinstance(origin, LocalFiles):
        visit, visit_imports = _local_pages(api, extraction, origin)
        imports |= visit_imports
    else:
        capture, capture_imports = _capture_function(api, extraction)
        imports |= capture_imports
        sections.append(capture)
        if pagination.uses_url_pattern:
            visit = _pattern_pages(api, pagination)
        elif pagination.uses_next_button:
            if not modern:
                imports.add('from selenium.webdriver.common.by import By')
            visit = _button_pages(api, pagination)
        else:
            visit = _single_page(api, pagination)

    script = [
        '# --- Script ---',
        'os.makedirs(folder_name, exist_ok=True)',
        'try:',
        indent('\n'.join(visit)),
        'finally:',
        *(f'    {line}' for line in api.close),
        '    print("\\nScraping finished. Browser closed.")',
    ]
    sections.append('\n'.join(script))

    if extraction is not None:
        output_block = render_output(extraction, output)
        imports |= output_block.imports
        sections.append('# --- Final Output ---\n' + output_block.code)

    return compose_script(imports, sections)
