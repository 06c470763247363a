"""Answer shapes the AI suggestion service asks the model for."""

from typing import Literal

from pydantic import BaseModel, Field


class FieldSuggestion(BaseModel):
    """One field the model thinks is worth extracting from a container."""

    name: str = Field(description='Short snake_case variable name, e.g. product_title')
    tag: str = Field(description='HTML tag of the element, e.g. h2')
    attrs: str = Field(default='', description='Minimal attributes identifying the element, e.g. class=title')


class UrlMethodAdvice(BaseModel):
    """Whether a site needs a real browser or can be fetched directly.

    Attributes:
        recommendation: 'static' for plain HTTP fetching, 'browser' for automation
        reason: Short explanation shown to the operator

    """

    recommendation: Literal['static', 'browser']
    reason: str


class NextButtonSuggestion(BaseModel):
    """CSS selector of the control that leads to the next page."""

    selector: str = Field(description='CSS selector of the next-page link or button')


class LinkFilterVerdict(BaseModel):
    """Hrefs the model kept after applying the operator's instruction."""

    accepted_hrefs: list[str] = Field(default_factory=list)


class FieldSuggestions(BaseModel):
    """All fields suggested for one container."""

    fields: list[FieldSuggestion] = Field(default_factory=list)
