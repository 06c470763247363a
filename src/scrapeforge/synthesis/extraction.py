"""Extraction and output sections shared by every generated script.

The extraction block assumes a parsed ``soup`` for one page and appends its
records to ``all_data``. The output block runs once, after every page was
processed.
"""

from scrapeforge.core.compiler import INVALID_SELECTOR, compile_descriptor
from scrapeforge.models import ContainerDescriptor, ExtractionConfig, OutputSpec
from scrapeforge.synthesis.literals import CodeBlock, py_str

NO_DATA_NOTICE = 'No data extracted to save.'
UNRESOLVED_LINKS_COMMENT = '# No base URL is known for these pages, so relative hrefs are left unresolved.'


def _selector(descriptor: ContainerDescriptor) -> str:
    return py_str(compile_descriptor(descriptor))


def _descriptors_in_use(extraction: ExtractionConfig) -> list[tuple[str, ContainerDescriptor]]:
    if extraction.mode == 'structured':
        return [('the container', extraction.container)] + [(f"field '{f.name}'", f) for f in extraction.fields]
    if extraction.mode == 'simple':
        field = extraction.primary_field
        return [(f"field '{field.name}'", field)] if field else []
    if extraction.link_strategy == 'container':
        return [('the link container', extraction.link_container), ('the link', extraction.link_selector)]
    return []


def find_gaps(extraction: ExtractionConfig) -> list[str]:
    """Everything that prevents an extraction loop from being generated.

    Args:
        extraction: Extraction configuration

    Returns:
        Missing parts plus descriptors whose attributes could not be compiled.

    """
    gaps = extraction.missing_parts()
    if gaps:
        return gaps
    return [
        f'valid attributes for {label}'
        for label, descriptor in _descriptors_in_use(extraction)
        if compile_descriptor(descriptor) == INVALID_SELECTOR
    ]


def render_guidance(gaps: list[str]) -> str:
    """Comment-only script telling the operator what to complete."""
    lines = ['# Please complete the extraction definitions to generate the script.']
    if gaps:
        lines.append(f'# Still needed: {", ".join(gaps)}.')
    lines.extend(
        [
            "# - For 'Structured Data', define a container and at least one field.",
            "# - For a 'Simple List', define the single field you want to extract.",
            "# - For 'Links' from containers, define the link container and the link tag.",
        ]
    )
    return '\n'.join(lines) + '\n'


def _structured(extraction: ExtractionConfig, source_label: str) -> CodeBlock:
    lines = [
        '# Find all the container elements',
        f'container_selector = {_selector(extraction.container)}',
        'containers = soup.select(container_selector)',
        f'print(f"    Found {{len(containers)}} containers for {source_label}.")',
        '',
        '# Extract data from each container',
        'for c in containers:',
        '    item = {}',
    ]
    for field in extraction.fields:
        lines.append(f'    field_element = c.select_one({_selector(field)})')
        lines.append(f'    item[{py_str(field.name)}] = field_element.get_text(strip=True) if field_element else None')
    lines.append('    all_data.append(item)')
    return CodeBlock('\n'.join(lines))


def _simple(extraction: ExtractionConfig, source_label: str) -> CodeBlock:
    field = extraction.primary_field
    lines = [
        '# Find all matching elements on the page',
        f'selector = {_selector(field)}',
        'elements = soup.select(selector)',
        f'print(f"    Found {{len(elements)}} matching elements for {source_label}.")',
        '',
        '# Extract the text content from each element',
        'for el in elements:',
        '    all_data.append(el.get_text(strip=True))',
    ]
    return CodeBlock('\n'.join(lines))


def _link_record(base_url_expr: str | None) -> tuple[list[str], str, set[str]]:
    if base_url_expr is None:
        return [UNRESOLVED_LINKS_COMMENT], 'href', set()
    return [f'base_url = {base_url_expr}'], 'urljoin(base_url, href)', {'from urllib.parse import urljoin'}


def _links(extraction: ExtractionConfig, source_label: str, base_url_expr: str | None) -> CodeBlock:
    preamble, href_expr, imports = _link_record(base_url_expr)
    append_line = f'all_data.append({{"text": anchor.get_text(strip=True), "href": {href_expr}}})'

    if extraction.link_strategy == 'container':
        lines = [
            '# Take the first link inside every link container',
            *preamble,
            f'link_containers = soup.select({_selector(extraction.link_container)})',
            f'print(f"    Found {{len(link_containers)}} link containers for {source_label}.")',
            'for link_container in link_containers:',
            f'    anchor = link_container.select_one({_selector(extraction.link_selector)})',
            '    if anchor is None:',
            '        continue',
            '    href = (anchor.get("href") or "").strip()',
            '    if not href:',
            '        continue',
            f'    {append_line}',
        ]
    else:
        lines = [
            '# Collect every hyperlink on the page',
            *preamble,
            'anchors = soup.select("a[href]")',
            f'print(f"    Found {{len(anchors)}} links for {source_label}.")',
            'for anchor in anchors:',
            '    href = (anchor.get("href") or "").strip()',
            '    if not href:',
            '        continue',
            f'    {append_line}',
        ]
    return CodeBlock('\n'.join(lines), imports)


def render_extraction(extraction: ExtractionConfig, source_label: str, base_url_expr: str | None) -> CodeBlock:
    """Per-page extraction code for the configured mode.

    Args:
        extraction: Complete extraction configuration (see find_gaps)
        source_label: Wording used in progress messages, e.g. 'this URL'
        base_url_expr: Python expression evaluating to the page URL in the
            generated script, or None when no base URL is known

    Returns:
        CodeBlock at top-level indentation.

    """
    if extraction.mode == 'structured':
        return _structured(extraction, source_label)
    if extraction.mode == 'simple':
        return _simple(extraction, source_label)
    return _links(extraction, source_label, base_url_expr)


def _save_block(title: str, file_name: str, label: str, body: list[str]) -> str:
    lines = [
        f'# --- Save data to {title} ---',
        'if all_data:',
        f'    output_file = os.path.join(folder_name, "{file_name}")',
        '    print(f"\\nSaving {len(all_data)} items to {output_file}...")',
        '    try:',
        *(f'        {line}' for line in body),
        f'        print("Data successfully saved to {label}.")',
        '    except OSError as e:',
        f'        print(f"Error saving to {label}: {{e}}")',
        'else:',
        f'    print("\\n{NO_DATA_NOTICE}")',
    ]
    return '\n'.join(lines)


def render_output(extraction: ExtractionConfig, output: OutputSpec) -> CodeBlock:
    """Final output section writing or printing ``all_data``.

    Structured and links records are dictionaries; simple mode collects plain
    strings stored under the field name.
    """
    if output.format == 'print':
        lines = [
            '# --- Print Extracted Data ---',
            'print("\\n--- Extracted Data ---")',
            'if all_data:',
            '    for index, item in enumerate(all_data, start=1):',
            '        print(f"{index}. {item}")',
            'else:',
            f'    print("{NO_DATA_NOTICE}")',
        ]
        return CodeBlock('\n'.join(lines))

    records = extraction.mode != 'simple'
    column = py_str(extraction.primary_field.name) if not records else ''

    if output.format == 'csv':
        open_line = 'with open(output_file, "w", newline="", encoding="utf-8") as csvfile:'
        if records:
            body = [
                open_line,
                '    writer = csv.DictWriter(csvfile, fieldnames=list(all_data[0].keys()))',
                '    writer.writeheader()',
                '    writer.writerows(all_data)',
            ]
        else:
            body = [
                open_line,
                '    writer = csv.writer(csvfile)',
                f'    writer.writerow([{column}])',
                '    for item in all_data:',
                '        writer.writerow([item])',
            ]
        return CodeBlock(_save_block('CSV', 'output.csv', 'CSV', body), {'import csv'})

    payload = 'all_data' if records else f'{{{column}: all_data}}'
    body = [
        'with open(output_file, "w", encoding="utf-8") as jsonfile:',
        f'    json.dump({payload}, jsonfile, indent=4, ensure_ascii=False)',
    ]
    return CodeBlock(_save_block('JSON', 'output.json', 'JSON', body), {'import json'})
