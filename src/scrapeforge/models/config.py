"""Pydantic models for script generation settings."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field, field_validator

from scrapeforge.models.descriptors import ExtractionConfig

Browser = Literal['chrome', 'firefox', 'edge', 'brave', 'opera']
OutputFormat = Literal['csv', 'json', 'print']

DEFAULT_PROJECT_NAME = 'scraping_project'


def clean_project_name(value: str) -> str:
    """Keep ASCII letters, digits, '_' and '-', falling back to the default name."""
    cleaned = ''.join(ch for ch in value if ch.isascii() and (ch.isalnum() or ch in '_-'))
    return cleaned or DEFAULT_PROJECT_NAME


class PaginationConfig(BaseModel):
    """Which pages the generated script visits.

    Attributes:
        url: Page URL for single-page scraping, start URL for button pagination
        scope: Single page or multiple pages
        mode: Click a 'next' control or build URLs from a pattern
        start_page: First page number (used for file names and URL patterns)
        page_count: Total number of pages to visit
        next_selector: CSS selector of the 'next page' control
        url_prefix: Text placed before the page number in pattern mode
        url_suffix: Text placed after the page number in pattern mode

    """

    url: str = ''
    scope: Literal['single', 'multi'] = 'single'
    mode: Literal['button', 'url'] = 'button'
    start_page: int = Field(default=1, ge=1)
    page_count: int = Field(default=5, ge=1)
    next_selector: str = 'li.next > a'
    url_prefix: str = ''
    url_suffix: str = ''

    @property
    def is_multi(self) -> bool:
        """True for multi-page scraping."""
        return self.scope == 'multi'

    @property
    def uses_url_pattern(self) -> bool:
        """True when page URLs are built from prefix + page number + suffix."""
        return self.is_multi and self.mode == 'url'

    @property
    def uses_next_button(self) -> bool:
        """True when pages are reached by clicking a 'next' control."""
        return self.is_multi and self.mode == 'button'

    @property
    def end_page(self) -> int:
        """Exclusive upper bound of the page range."""
        return self.start_page + self.page_count


class NetworkConfig(BaseModel):
    """Network behaviour of the generated script.

    Attributes:
        proxies: Proxy candidates (host:port); one is picked at random
        request_delay_ms: Delay between requests / page loads in milliseconds
        browser: Browser profile selecting the user agent and driver family

    """

    proxies: list[str] = Field(default_factory=list)
    request_delay_ms: int = Field(default=2000, ge=0)
    browser: Browser = 'chrome'

    @field_validator('proxies', mode='before')
    @classmethod
    def _split_proxy_lines(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.splitlines()
        if isinstance(value, list):
            return [str(line).strip() for line in value if str(line).strip()]
        return value

    @property
    def delay_seconds(self) -> float:
        """The request delay in seconds."""
        return self.request_delay_ms / 1000


class OutputSpec(BaseModel):
    """How the generated script reports its results."""

    format: OutputFormat = 'csv'


class InteractiveBrowser(BaseModel):
    """Browser automation backend.

    Attributes:
        engine: 'classic' drives Selenium, 'modern' drives Playwright

    """

    kind: Literal['browser'] = 'browser'
    engine: Literal['classic', 'modern'] = 'classic'


class StaticFetch(BaseModel):
    """Direct HTTP fetch (or saved-file) backend."""

    kind: Literal['static'] = 'static'


class LiveUrl(BaseModel):
    """Pages come from the live network."""

    kind: Literal['live'] = 'live'


class LocalFiles(BaseModel):
    """Pages come from HTML files previously saved in the project folder.

    Attributes:
        base_url: Site URL used to resolve relative links, if known

    """

    kind: Literal['local'] = 'local'
    base_url: str | None = None


BackendTarget = Annotated[InteractiveBrowser | StaticFetch, Field(discriminator='kind')]
SourceOrigin = Annotated[LiveUrl | LocalFiles, Field(discriminator='kind')]


class ScraperJob(BaseModel):
    """A complete script generation request, as stored in a job file.

    Attributes:
        project_name: Folder the generated script reads from and writes to
        target: Execution backend
        origin: Where page content comes from
        extraction: What to extract
        pagination: Which pages to visit
        network: Proxy, delay and browser profile settings
        output: Output format

    """

    project_name: str = DEFAULT_PROJECT_NAME
    target: BackendTarget = Field(default_factory=StaticFetch)
    origin: SourceOrigin = Field(default_factory=LiveUrl)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    pagination: PaginationConfig = Field(default_factory=PaginationConfig)
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    output: OutputSpec = Field(default_factory=OutputSpec)

    @field_validator('project_name')
    @classmethod
    def _sanitize_project_name(cls, value: str) -> str:
        return clean_project_name(value)
