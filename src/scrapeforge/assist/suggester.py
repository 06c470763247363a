"""AI suggestions for URL patterns, fields, fetch method, pagination and links."""

from typing import Any

import logfire
from pydantic_ai import Agent
from rich.console import Console

from scrapeforge.assist.acceptance import (
    accept_field_suggestions,
    accept_link_filter,
    accept_next_button,
    accept_url_advice,
    split_page_pattern,
)
from scrapeforge.assist.llm_config import LLMConfig, create_model
from scrapeforge.assist.models import (
    FieldSuggestions,
    LinkFilterVerdict,
    NextButtonSuggestion,
    UrlMethodAdvice,
)
from scrapeforge.core.harvester import apply_link_filter
from scrapeforge.exceptions import SuggestionError, SuggestionRejected
from scrapeforge.models import FieldDescriptor, LinkCandidate
from scrapeforge.utils.retry import get_retryer, log_retry

SYSTEM_PROMPT = (
    'You help people configure web scrapers. '
    'Answer only with what is asked for, based on the URL or HTML you are given. '
    'Never invent elements that are not present in the provided HTML.'
)

# HTML beyond this many characters is cut before it is sent to the model
MAX_HTML_CHARS = 30000


class SuggestionService:
    """Asks an LLM for configuration suggestions and accepts only well-formed answers.

    Attributes:
        agent: The pydantic-ai agent answering the prompts
        console: Rich console instance for formatted output
        max_attempts: Attempts per request before giving up
        retry_wait: Minimum wait between attempts in seconds
        model_name: Name of the model being used
        provider: Name of the LLM provider

    """

    def __init__(
        self,
        llm_config: LLMConfig | None = None,
        agent: Agent[Any, Any] | None = None,
        console: Console | None = None,
        max_attempts: int = 3,
        retry_wait: float = 1.0,
    ):
        """Initialize the service with LLM configuration or an agent.

        Args:
            llm_config: Configuration for the LLM provider and model
            agent: Ready-made agent, takes priority over llm_config
            console: Rich console instance for formatted output
            max_attempts: Attempts per request before giving up. Defaults to 3.
            retry_wait: Minimum wait between attempts in seconds. Defaults to 1.0.

        Raises:
            ValueError: Must provide llm_config or an agent

        """
        self.console = console or Console()
        self.max_attempts = max_attempts
        self.retry_wait = retry_wait

        if agent is not None:
            self.agent = agent
            self.model_name = 'custom-agent'
            self.provider = 'custom'
        elif llm_config is not None:
            self.agent = Agent(create_model(llm_config), output_type=str, system_prompt=SYSTEM_PROMPT)
            self.model_name = llm_config.model_name
            self.provider = llm_config.provider
        else:
            raise ValueError('Either provide llm_config or agent parameter')

    def _ask(self, prompt: str, output_type: Any) -> Any:
        """Run one prompt with retries and return the raw output.

        Raises:
            SuggestionError: If every attempt failed.

        """
        retryer = get_retryer(
            max_attempts=self.max_attempts,
            wait_min=self.retry_wait,
            wait_max=max(self.retry_wait, 10.0),
            log_callback=log_retry,
        )
        try:
            result = retryer(self.agent.run_sync, prompt, output_type=output_type)
        except Exception as e:
            self.console.print(f'[danger]  ✗ AI request failed: {e}[/danger]')
            logfire.error('AI request failed', error=str(e), provider=self.provider)
            raise SuggestionError(f'AI request failed: {e}') from e
        return result.output

    @logfire.instrument('suggest_url_pattern')
    def suggest_url_pattern(self, url: str) -> tuple[str, str]:
        """Find the page number in a URL and split the URL around it.

        Args:
            url: Example URL of one page of a paginated listing

        Returns:
            Tuple of (url_prefix, url_suffix).

        Raises:
            SuggestionError: If the model could not be reached.
            SuggestionRejected: If the answer has no {page} placeholder.

        """
        prompt = (
            f'Given the URL: "{url}". Find the page number in it. '
            'Replace that number with the placeholder "{page}". Return only the modified URL.'
        )
        pattern = self._ask(prompt, str)
        try:
            prefix, suffix = split_page_pattern(pattern)
        except SuggestionRejected:
            self.console.print('[warning]  AI could not detect a page number pattern[/warning]')
            raise
        self.console.print(f'[success]  ✓ URL pattern: {prefix}{{page}}{suffix}[/success]')
        return prefix, suffix

    @logfire.instrument('suggest_fields', extract_args=False)
    def suggest_fields(self, container_html: str) -> list[FieldDescriptor]:
        """Propose named fields for the markup of one container element.

        Args:
            container_html: Outer HTML of the first matching container

        Returns:
            Field descriptors with sanitized names.

        """
        prompt = f"""Given this HTML snippet of a single item in a list:
```html
{container_html[:MAX_HTML_CHARS]}
```

Identify the key pieces of information a user would want to extract. For each one provide:
1. A short, descriptive variable name in snake_case (e.g. product_title).
2. The HTML tag of the element (e.g. h2).
3. A minimal but effective set of attributes identifying the element within the snippet (e.g. class=title).

Return a list of objects with "name", "tag" and "attrs"."""
        fields = accept_field_suggestions(self._ask(prompt, FieldSuggestions))
        self.console.print(f'[success]  ✓ AI suggested {len(fields)} field(s)[/success]')
        return fields

    @logfire.instrument('advise_url_method')
    def advise_url_method(self, url: str) -> UrlMethodAdvice:
        """Recommend static fetching or browser automation for a site."""
        prompt = (
            f'Should the page at "{url}" be scraped with a plain HTTP request ("static") '
            'or does it need a real browser ("browser") because its content is rendered by JavaScript '
            'or protected against bots? Give your recommendation and a one-sentence reason.'
        )
        advice = accept_url_advice(self._ask(prompt, UrlMethodAdvice))
        logfire.info('URL method advice', url=url, recommendation=advice.recommendation)
        return advice

    @logfire.instrument('detect_next_button', extract_args=False)
    def detect_next_button(self, html: str) -> str:
        """Find the CSS selector of the control leading to the next page."""
        prompt = f"""Here is the HTML of one page of a paginated listing:
```html
{html[:MAX_HTML_CHARS]}
```

Return the CSS selector of the link or button that opens the next page.
Only use classes, ids and attributes that exist in the HTML above."""
        selector = accept_next_button(self._ask(prompt, NextButtonSuggestion))
        self.console.print(f'[success]  ✓ Next button: {selector}[/success]')
        return selector

    @logfire.instrument('filter_links', extract_args=False)
    def filter_links(self, candidates: list[LinkCandidate], instruction: str) -> list[LinkCandidate]:
        """Select the candidates matching a plain-language instruction.

        Args:
            candidates: Harvested links
            instruction: What the operator wants to keep, e.g. 'only product pages'

        Returns:
            A new list with ``selected`` set on the accepted links only.

        """
        if not candidates:
            return []
        listing = '\n'.join(f'- {c.href} ({c.text or "no text"})' for c in candidates)
        prompt = f"""Instruction: {instruction}

Links:
{listing}

Return the hrefs, exactly as written above, of the links that match the instruction."""
        accepted = accept_link_filter(self._ask(prompt, LinkFilterVerdict), {c.href for c in candidates})
        logfire.info('Links filtered', total=len(candidates), accepted=len(accepted))
        return apply_link_filter(candidates, accepted)
