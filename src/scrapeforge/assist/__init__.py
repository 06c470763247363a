"""AI suggestion adapter. Lives outside the extraction core and only proposes values."""

from scrapeforge.assist.acceptance import (
    accept_field_suggestions,
    accept_link_filter,
    accept_next_button,
    accept_url_advice,
    sanitize_field_name,
    split_page_pattern,
)
from scrapeforge.assist.llm_config import LLMConfig, config_from_env, create_model
from scrapeforge.assist.models import (
    FieldSuggestion,
    FieldSuggestions,
    LinkFilterVerdict,
    NextButtonSuggestion,
    UrlMethodAdvice,
)
from scrapeforge.assist.suggester import SuggestionService

__all__ = [
    'FieldSuggestion',
    'FieldSuggestions',
    'LLMConfig',
    'LinkFilterVerdict',
    'NextButtonSuggestion',
    'SuggestionService',
    'UrlMethodAdvice',
    'accept_field_suggestions',
    'accept_link_filter',
    'accept_next_button',
    'accept_url_advice',
    'config_from_env',
    'create_model',
    'sanitize_field_name',
    'split_page_pattern',
]
