"""Extraction-rule core: selector compiling, testing and link harvesting."""

from scrapeforge.core.compiler import (
    INVALID_SELECTOR,
    AttrToken,
    compile_descriptor,
    compile_selector,
    describe_element,
    tokenize_attrs,
)
from scrapeforge.core.document import SampleDocument
from scrapeforge.core.harvester import apply_link_filter, harvest_all_links, harvest_container_links
from scrapeforge.core.session import ExtractionSession
from scrapeforge.core.tester import ScopeContext, SelectorTester

__all__ = [
    'INVALID_SELECTOR',
    'AttrToken',
    'ExtractionSession',
    'SampleDocument',
    'ScopeContext',
    'SelectorTester',
    'apply_link_filter',
    'compile_descriptor',
    'compile_selector',
    'describe_element',
    'harvest_all_links',
    'harvest_container_links',
    'tokenize_attrs',
]
