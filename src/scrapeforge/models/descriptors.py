"""Pydantic models describing what to extract from a page."""

from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator

ScrapingMode = Literal['structured', 'simple', 'links']
LinkStrategy = Literal['all', 'container']
ExtractionMethod = Literal['auto', 'manual']


class ContainerDescriptor(BaseModel):
    """A loose (tag, attrs) description of an element family.

    Attributes:
        tag: HTML tag name used as the selector head
        attrs: Free-form attribute string, e.g. ``class="item", data-id=4``

    """

    tag: str = Field(default='', description='HTML tag name')
    attrs: str = Field(default='', description='Free-form attribute descriptor')

    @field_validator('tag')
    @classmethod
    def _strip_tag(cls, value: str) -> str:
        return value.strip()

    @property
    def has_tag(self) -> bool:
        """True if a tag has been provided."""
        return bool(self.tag)


class FieldDescriptor(ContainerDescriptor):
    """A named field extracted from every container (or from the whole page).

    Attributes:
        id: Opaque, stable identifier used to key cached test results
        name: Identifier-safe output column name
        tag: HTML tag name used as the selector head
        attrs: Free-form attribute descriptor

    """

    id: str = Field(default_factory=lambda: uuid4().hex, description='Stable descriptor id')
    name: str = Field(default='item_1', pattern=r'^[A-Za-z0-9_]+$', description='Output column name')


class ExtractionConfig(BaseModel):
    """Everything the operator defined about what to extract.

    Attributes:
        mode: Extraction mode (structured, simple or links)
        container: Repeating parent element for structured mode
        fields: Named fields; simple mode uses only the first one
        link_strategy: Whole-document or container-scoped link harvesting
        link_container: Container used by the container-scoped link strategy
        link_selector: Anchor descriptor looked up inside each link container

    """

    mode: ScrapingMode = 'structured'
    container: ContainerDescriptor = Field(default_factory=ContainerDescriptor)
    fields: list[FieldDescriptor] = Field(default_factory=list)
    link_strategy: LinkStrategy = 'all'
    link_container: ContainerDescriptor = Field(default_factory=ContainerDescriptor)
    link_selector: ContainerDescriptor = Field(default_factory=lambda: ContainerDescriptor(tag='a'))

    @property
    def primary_field(self) -> FieldDescriptor | None:
        """The single field used by simple mode, if any."""
        return self.fields[0] if self.fields else None

    def missing_parts(self) -> list[str]:
        """List what still has to be defined before a script can be generated.

        Returns:
            Human-readable descriptions of the missing parts; empty when complete.

        """
        missing: list[str] = []

        if self.mode == 'structured':
            if not self.container.has_tag:
                missing.append('a container tag')
            if not self.fields:
                missing.append('at least one field')
            missing.extend(f"an HTML tag for field '{f.name}'" for f in self.fields if not f.has_tag)
        elif self.mode == 'simple':
            field = self.primary_field
            if field is None or not field.has_tag:
                missing.append('an HTML tag for the field to extract')
        elif self.link_strategy == 'container':
            if not self.link_container.has_tag:
                missing.append('a link container tag')
            if not self.link_selector.has_tag:
                missing.append('a link tag')

        return missing

    @property
    def is_complete(self) -> bool:
        """True if nothing is missing for the current mode."""
        return not self.missing_parts()
