"""Pydantic models for selector test and link harvesting results."""

from typing import Literal

from pydantic import BaseModel, Field

DescriptorKind = Literal['container', 'field', 'link_container', 'link_field']

MatchStatus = Literal[
    'ok',
    'no_match',
    'empty_tag',
    'selector_invalid',
    'container_unresolved',
]


class MatchReport(BaseModel):
    """Outcome of testing one descriptor against the sample document.

    Attributes:
        count: Matching elements, or containers holding a match for scoped fields
        preview: Operator-facing summary of the matches
        status: Why the test succeeded or failed ('ok', 'no_match', 'empty_tag',
            'selector_invalid', 'container_unresolved')
        selector: Compiled selector that was evaluated, if any
        total_containers: Container count for container-scoped field tests

    """

    count: int = Field(default=0, ge=0, description='Number of matches')
    preview: str = Field(default='', description='Human readable summary')
    status: MatchStatus = Field(description='Result classification')
    selector: str | None = Field(default=None, description='Compiled selector')
    total_containers: int | None = Field(default=None, description='Containers searched')

    @property
    def is_error(self) -> bool:
        """True for every status except 'ok'."""
        return self.status != 'ok'


class LinkCandidate(BaseModel):
    """A hyperlink harvested from the sample document.

    Attributes:
        text: Visible anchor text
        href: Absolute URL when resolvable, otherwise the raw href
        selected: Whether the link is kept (filters may clear it)
        warning: Non-fatal resolution problem, if any

    """

    text: str = Field(default='', description='Anchor text')
    href: str = Field(min_length=1, description='Link target')
    selected: bool = Field(default=True, description='Kept by the operator')
    warning: str | None = Field(default=None, description='Resolution warning')
