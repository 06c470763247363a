"""Pydantic models for descriptors, generation settings and results."""

from scrapeforge.models.config import (
    DEFAULT_PROJECT_NAME,
    BackendTarget,
    Browser,
    InteractiveBrowser,
    LiveUrl,
    LocalFiles,
    NetworkConfig,
    OutputFormat,
    OutputSpec,
    PaginationConfig,
    ScraperJob,
    SourceOrigin,
    StaticFetch,
    clean_project_name,
)
from scrapeforge.models.descriptors import (
    ContainerDescriptor,
    ExtractionConfig,
    ExtractionMethod,
    FieldDescriptor,
    LinkStrategy,
    ScrapingMode,
)
from scrapeforge.models.results import DescriptorKind, LinkCandidate, MatchReport, MatchStatus

__all__ = [
    'DEFAULT_PROJECT_NAME',
    'BackendTarget',
    'Browser',
    'ContainerDescriptor',
    'DescriptorKind',
    'ExtractionConfig',
    'ExtractionMethod',
    'FieldDescriptor',
    'InteractiveBrowser',
    'LinkCandidate',
    'LinkStrategy',
    'LiveUrl',
    'LocalFiles',
    'MatchReport',
    'MatchStatus',
    'NetworkConfig',
    'OutputFormat',
    'OutputSpec',
    'PaginationConfig',
    'ScraperJob',
    'ScrapingMode',
    'SourceOrigin',
    'StaticFetch',
    'clean_project_name',
]
