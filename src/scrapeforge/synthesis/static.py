"""Scripts that fetch pages with requests or read previously saved HTML files."""

from scrapeforge.models import ExtractionConfig, LocalFiles, NetworkConfig, OutputSpec, PaginationConfig
from scrapeforge.synthesis.extraction import render_extraction, render_output
from scrapeforge.synthesis.literals import compose_script, indent, py_number, py_str, py_str_list
from scrapeforge.synthesis.profiles import user_agent_for

BUTTON_PAGINATION_COMMENT = (
    '# Next-button pagination needs a browser. A static fetch only visits the start URL;\n'
    '# switch to URL-pattern pagination to scrape more pages.'
)


def render_local_listing() -> str:
    """Code collecting the saved ``*.html`` files of the project folder into ``file_names``."""
    return '\n'.join(
        [
            '# Find all HTML files in the folder',
            'try:',
            '    file_names = sorted(f for f in os.listdir(folder_name) if f.endswith(".html"))',
            'except FileNotFoundError:',
            '    print(f"Error: The directory \'{folder_name}\' does not exist. Place it next to this script.")',
            '    raise SystemExit(1)',
            'if not file_names:',
            '    print(f"Error: No .html files found in the \'{folder_name}\' directory.")',
            '    raise SystemExit(1)',
        ]
    )


def render_url_list(pagination: PaginationConfig) -> str:
    """Code building the ``urls`` list visited by a static fetch script."""
    if pagination.uses_url_pattern:
        return '\n'.join(
            [
                '# Page URLs are built from this prefix and suffix around the page number',
                f'url_prefix = {py_str(pagination.url_prefix)}',
                f'url_suffix = {py_str(pagination.url_suffix)}',
                f'start_page = {pagination.start_page}',
                f'pages_to_scrape = {pagination.page_count}',
                'end_page = start_page + pages_to_scrape',
                'urls = [f"{url_prefix}{page_num}{url_suffix}" for page_num in range(start_page, end_page)]',
            ]
        )
    lines = [BUTTON_PAGINATION_COMMENT] if pagination.uses_next_button else []
    lines.append(f'urls = [{py_str(pagination.url)}]')
    return '\n'.join(lines)


def render_live_fetch(
    extraction: ExtractionConfig,
    pagination: PaginationConfig,
    network: NetworkConfig,
    output: OutputSpec,
    project_name: str,
) -> str:
    """Script fetching every page with requests and extracting from the response body."""
    extraction_block = render_extraction(extraction, 'this URL', 'url')
    output_block = render_output(extraction, output)
    imports = {'import os', 'import time', 'import requests', 'from bs4 import BeautifulSoup'}
    imports |= extraction_block.imports | output_block.imports

    config_lines = [
        '# --- Configuration ---',
        '# Folder where output files are saved',
        f'folder_name = {py_str(project_name)}',
        "# Seconds to wait between requests. Be respectful of the website's servers.",
        f'REQUEST_DELAY = {py_number(network.delay_seconds)}',
        '# Records extracted from every page',
        'all_data = []',
        f'# User agent of the {network.browser} browser profile',
        f'USER_AGENT = {py_str(user_agent_for(network.browser))}',
        'headers = {"User-Agent": USER_AGENT}',
    ]
    proxy_lines: list[str]
    if network.proxies:
        imports.add('import random')
        config_lines.append(f'proxies = {py_str_list(network.proxies)}')
        proxy_lines = [
            '    chosen_proxy = random.choice(proxies)',
            '    proxy_to_use = {"http": f"http://{chosen_proxy}", "https": f"http://{chosen_proxy}"}',
            '    print(f"    Using proxy: {chosen_proxy}")',
        ]
    else:
        proxy_lines = ['    proxy_to_use = None']

    loop_lines = [
        '# --- Script ---',
        'os.makedirs(folder_name, exist_ok=True)',
        render_url_list(pagination),
        '',
        'print(f"Starting to scrape {len(urls)} URL(s)...")',
        'for index, url in enumerate(urls):',
        '    if index:',
        '        print(f"    Waiting {REQUEST_DELAY} seconds before next request...")',
        '        time.sleep(REQUEST_DELAY)',
        '    print(f"  - Scraping: {url}")',
        *proxy_lines,
        '    try:',
        '        response = requests.get(url, headers=headers, proxies=proxy_to_use, timeout=10)',
        '        response.raise_for_status()',
        '    except requests.exceptions.RequestException as e:',
        '        print(f"    Error fetching URL {url}: {e}")',
        '        continue',
        '',
        '    soup = BeautifulSoup(response.text, "html.parser")',
        indent(extraction_block.code),
    ]

    setup = '\n'.join(
        [
            '# --- Setup Instructions ---',
            '# 1. Make sure you have Python installed.',
            '# 2. Install required libraries:',
            '#    pip install beautifulsoup4 requests',
        ]
    )
    final_output = '# --- Final Output ---\n' + output_block.code
    return compose_script(imports, [setup, '\n'.join(config_lines), '\n'.join(loop_lines), final_output])


def render_local_files(
    extraction: ExtractionConfig,
    origin: LocalFiles,
    output: OutputSpec,
    project_name: str,
) -> str:
    """Script extracting data from HTML files saved in the project folder. No network access."""
    base_url_expr = py_str(origin.base_url) if origin.base_url else None
    extraction_block = render_extraction(extraction, 'this file', base_url_expr)
    output_block = render_output(extraction, output)
    imports = {'import os', 'from bs4 import BeautifulSoup'} | extraction_block.imports | output_block.imports

    setup = '\n'.join(
        [
            '# --- Setup Instructions ---',
            '# 1. Make sure you have Python installed.',
            '# 2. Install required libraries:',
            '#    pip install beautifulsoup4',
            f"# 3. Place this script in the SAME directory as the '{project_name}' folder.",
        ]
    )
    config = '\n'.join(
        [
            '# --- Configuration ---',
            '# Folder holding the saved HTML files; output is written there too',
            f'folder_name = {py_str(project_name)}',
            '# Records extracted from every file',
            'all_data = []',
        ]
    )
    loop_lines = [
        '# --- Script ---',
        render_local_listing(),
        '',
        'print(f"Processing {len(file_names)} file(s) from the \'{folder_name}\' folder...")',
        'for file_name in file_names:',
        '    file_path = os.path.join(folder_name, file_name)',
        '    print(f"  - Reading {file_path}")',
        '    try:',
        '        with open(file_path, encoding="utf-8") as f:',
        '            html_content = f.read()',
        '    except OSError as e:',
        '        print(f"    Error reading file \'{file_path}\': {e}")',
        '        continue',
        '',
        '    soup = BeautifulSoup(html_content, "html.parser")',
        indent(extraction_block.code),
    ]
    final_output = '# --- Final Output ---\n' + output_block.code
    return compose_script(imports, [setup, config, '\n'.join(loop_lines), final_output])
