"""
scrapeforge - Scraper Script Builder
====================================

scrapeforge turns loose (tag, attributes) descriptions of page elements into
CSS selectors, tests them against a sample page and generates a standalone
Python scraping script for the chosen backend.

Main Components:
    - compile_selector: Turn a tag and an attrs string into a CSS selector
    - SelectorTester: Report how a descriptor matches a sample document
    - ExtractionSession: Edit an extraction configuration and cache test results
    - harvest_all_links / harvest_container_links: Collect link candidates
    - synthesize: Generate the scraping script
    - SuggestionService: Optional AI suggestions (URL patterns, fields, links)

Example:
    >>> from scrapeforge import compile_selector
    >>> compile_selector('div', 'class="item card"')
    'div.item.card'
"""

__version__ = '0.1.0'

from scrapeforge.core import (
    ExtractionSession,
    SampleDocument,
    ScopeContext,
    SelectorTester,
    apply_link_filter,
    compile_descriptor,
    compile_selector,
    describe_element,
    harvest_all_links,
    harvest_container_links,
)
from scrapeforge.exceptions import JobConfigError, ScrapeForgeError, SuggestionError, SuggestionRejected
from scrapeforge.models import (
    ContainerDescriptor,
    ExtractionConfig,
    FieldDescriptor,
    InteractiveBrowser,
    LinkCandidate,
    LiveUrl,
    LocalFiles,
    MatchReport,
    NetworkConfig,
    OutputSpec,
    PaginationConfig,
    ScraperJob,
    StaticFetch,
)
from scrapeforge.synthesis import synthesize, synthesize_job

__all__ = [
    'ContainerDescriptor',
    'ExtractionConfig',
    'ExtractionSession',
    'FieldDescriptor',
    'InteractiveBrowser',
    'JobConfigError',
    'LinkCandidate',
    'LiveUrl',
    'LocalFiles',
    'MatchReport',
    'NetworkConfig',
    'OutputSpec',
    'PaginationConfig',
    'SampleDocument',
    'ScopeContext',
    'ScrapeForgeError',
    'ScraperJob',
    'SelectorTester',
    'StaticFetch',
    'SuggestionError',
    'SuggestionRejected',
    'apply_link_filter',
    'compile_descriptor',
    'compile_selector',
    'describe_element',
    'harvest_all_links',
    'harvest_container_links',
    'synthesize',
    'synthesize_job',
]
