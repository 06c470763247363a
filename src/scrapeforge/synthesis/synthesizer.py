"""Entry point turning a complete configuration into a standalone Python script."""

import logging

import logfire

from scrapeforge.models import (
    DEFAULT_PROJECT_NAME,
    BackendTarget,
    ExtractionConfig,
    InteractiveBrowser,
    LocalFiles,
    NetworkConfig,
    OutputSpec,
    PaginationConfig,
    ScraperJob,
    SourceOrigin,
    clean_project_name,
)
from scrapeforge.synthesis.browser import render_browser_script
from scrapeforge.synthesis.extraction import find_gaps, render_guidance
from scrapeforge.synthesis.static import render_live_fetch, render_local_files

logger = logging.getLogger(__name__)


def _render(
    target: BackendTarget,
    origin: SourceOrigin,
    extraction: ExtractionConfig | None,
    pagination: PaginationConfig,
    network: NetworkConfig,
    output: OutputSpec,
    project_name: str,
) -> str:
    capture_only = extraction is None and isinstance(target, InteractiveBrowser) and not isinstance(origin, LocalFiles)
    if not capture_only:
        gaps = find_gaps(extraction) if extraction is not None else ['an extraction configuration']
        if gaps:
            logger.info(f'Extraction incomplete, emitting guidance: {gaps}')
            return render_guidance(gaps)

    if isinstance(target, InteractiveBrowser):
        return render_browser_script(target, origin, extraction, pagination, network, output, project_name)
    if isinstance(origin, LocalFiles):
        return render_local_files(extraction, origin, output, project_name)
    return render_live_fetch(extraction, pagination, network, output, project_name)


def synthesize(
    target: BackendTarget,
    origin: SourceOrigin,
    extraction: ExtractionConfig | None,
    pagination: PaginationConfig | None = None,
    network: NetworkConfig | None = None,
    output: OutputSpec | None = None,
    project_name: str = DEFAULT_PROJECT_NAME,
) -> str:
    """Generate the Python scraping script for a configuration.

    The result is fully determined by the arguments. When the extraction is
    incomplete the script is a comment telling the operator what is missing
    and contains no extraction loop. A browser target accepts
    ``extraction=None`` for a script that only captures page markup.

    This function never raises: an internal failure is logged and reported
    as a comment-only script.

    Args:
        target: Execution backend (browser automation or static fetch)
        origin: Live URLs or previously saved HTML files
        extraction: What to extract, or None (browser capture only)
        pagination: Pages to visit, defaults to a single page
        network: Proxy, delay and browser profile settings
        output: Output format, defaults to CSV
        project_name: Folder the script reads from and writes to

    Returns:
        Python source text.

    """
    pagination = pagination or PaginationConfig()
    network = network or NetworkConfig()
    output = output or OutputSpec()
    project_name = clean_project_name(project_name)

    with logfire.span(
        'synthesize',
        target=getattr(target, 'kind', None),
        origin=getattr(origin, 'kind', None),
        mode=extraction.mode if extraction is not None else None,
        output=output.format,
    ):
        try:
            return _render(target, origin, extraction, pagination, network, output, project_name)
        except Exception as e:
            logger.exception('Script generation failed')
            logfire.error('Script generation failed', error=str(e))
            return f'# Script generation failed: {type(e).__name__}.\n# Review the configuration and try again.\n'


def synthesize_job(job: ScraperJob, capture_only: bool = False) -> str:
    """Generate the script for a job file.

    Args:
        job: Validated job
        capture_only: Drop the extraction (browser targets only capture pages)

    Returns:
        Python source text.

    """
    return synthesize(
        job.target,
        job.origin,
        None if capture_only else job.extraction,
        job.pagination,
        job.network,
        job.output,
        job.project_name,
    )
