"""Caller-owned store of test results for an extraction configuration being edited."""

from scrapeforge.core.tester import ScopeContext, SelectorTester
from scrapeforge.models import (
    ContainerDescriptor,
    ExtractionConfig,
    ExtractionMethod,
    FieldDescriptor,
    MatchReport,
    ScrapingMode,
)


class ExtractionSession:
    """Holds an ExtractionConfig together with its cached test results.

    Results are keyed by descriptor id. Editing a descriptor drops its cached
    result; editing a container also resets its "ready" flag, the dependent
    extraction-method choice and the reports that were scoped by it.

    Attributes:
        config: The extraction configuration being edited
        results: Cached field reports keyed by field id
        container_result: Last report for the container
        link_container_result: Last report for the link container
        container_ready: True once the container matched at least one element
        link_container_ready: Same flag for the link container
        extraction_method: How fields are being defined ('auto', 'manual' or None)

    """

    def __init__(self, config: ExtractionConfig | None = None):
        """Initialize the session.

        Args:
            config: Configuration to edit. Defaults to a structured config with one empty field.

        """
        self.config = config or ExtractionConfig(fields=[FieldDescriptor()])
        self.results: dict[str, MatchReport] = {}
        self.container_result: MatchReport | None = None
        self.link_container_result: MatchReport | None = None
        self.container_ready = False
        self.link_container_ready = False
        self.extraction_method: ExtractionMethod | None = None

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def add_field(self, name: str | None = None) -> FieldDescriptor:
        """Append an empty field named item_<n> unless a name is given."""
        field = FieldDescriptor(name=name or f'item_{len(self.config.fields) + 1}')
        self.config.fields.append(field)
        return field

    def remove_field(self, field_id: str) -> bool:
        """Remove a field and its cached result. The last field is never removed.

        Returns:
            True if the field was removed.

        """
        if len(self.config.fields) <= 1:
            return False
        before = len(self.config.fields)
        self.config.fields = [f for f in self.config.fields if f.id != field_id]
        self.results.pop(field_id, None)
        return len(self.config.fields) < before

    def edit_field(self, field_id: str, **changes: str) -> FieldDescriptor:
        """Change a field's name, tag or attrs and drop its cached result.

        Raises:
            KeyError: If no field has this id.

        """
        for index, field in enumerate(self.config.fields):
            if field.id == field_id:
                updated = FieldDescriptor.model_validate({**field.model_dump(), **changes})
                self.config.fields[index] = updated
                self.results.pop(field_id, None)
                return updated
        raise KeyError(field_id)

    def edit_container(self, tag: str | None = None, attrs: str | None = None) -> None:
        """Change the container and reset everything that depended on it.

        Field reports are dropped too when fields are tested inside the container.

        """
        self.config.container = self._edited(self.config.container, tag, attrs)
        self.container_result = None
        self.container_ready = False
        self.extraction_method = None
        if self.config.mode == 'structured':
            for field in self.config.fields:
                self.results.pop(field.id, None)

    def edit_link_container(self, tag: str | None = None, attrs: str | None = None) -> None:
        """Change the link container, reset its ready flag and drop the link field report."""
        self.config.link_container = self._edited(self.config.link_container, tag, attrs)
        self.link_container_result = None
        self.link_container_ready = False
        self.results.pop('link_field', None)

    def edit_link_selector(self, tag: str | None = None, attrs: str | None = None) -> None:
        """Change the anchor descriptor used inside link containers."""
        self.config.link_selector = self._edited(self.config.link_selector, tag, attrs)
        self.results.pop('link_field', None)

    def switch_mode(self, mode: ScrapingMode) -> None:
        """Switch extraction mode, discarding containers, fields and results."""
        self.config = ExtractionConfig(mode=mode, fields=[FieldDescriptor()])
        self.results.clear()
        self.container_result = None
        self.link_container_result = None
        self.container_ready = False
        self.link_container_ready = False
        self.extraction_method = None

    def choose_extraction_method(self, method: ExtractionMethod) -> bool:
        """Record how fields will be defined. Requires a ready container.

        Returns:
            True if the choice was recorded.

        """
        if not self.container_ready:
            return False
        self.extraction_method = method
        return True

    def apply_field_suggestions(self, fields: list[FieldDescriptor]) -> None:
        """Replace the fields with suggested ones and switch to manual editing."""
        self.config.fields = list(fields)
        self.results.clear()
        self.extraction_method = 'manual'

    # ------------------------------------------------------------------
    # Testing
    # ------------------------------------------------------------------

    def test_container(self, tester: SelectorTester) -> MatchReport:
        """Test the container and update the ready flag."""
        container = self.config.container
        report = tester.test('container', container.tag, container.attrs)
        self.container_result = report
        self.container_ready = not report.is_error
        if report.is_error:
            self.extraction_method = None
        return report

    def test_link_container(self, tester: SelectorTester) -> MatchReport:
        """Test the link container and update its ready flag."""
        container = self.config.link_container
        report = tester.test('link_container', container.tag, container.attrs)
        self.link_container_result = report
        self.link_container_ready = not report.is_error
        return report

    def test_field(self, tester: SelectorTester, field_id: str) -> MatchReport:
        """Test one field in the scope of the current mode and store the report.

        Raises:
            KeyError: If no field has this id.

        """
        field = self._field(field_id)
        container = self.config.container if self.config.mode == 'structured' else None
        scope = ScopeContext(mode=self.config.mode, container=container)
        report = tester.test('field', field.tag, field.attrs, scope)
        self.results[field_id] = report
        return report

    def test_link_field(self, tester: SelectorTester) -> MatchReport:
        """Test the anchor descriptor inside the link containers."""
        link = self.config.link_selector
        scope = ScopeContext(mode=self.config.mode, container=self.config.link_container)
        report = tester.test('link_field', link.tag, link.attrs, scope)
        self.results['link_field'] = report
        return report

    def result_for(self, field_id: str) -> MatchReport | None:
        """Cached report for a field id, if any."""
        return self.results.get(field_id)

    def _field(self, field_id: str) -> FieldDescriptor:
        for field in self.config.fields:
            if field.id == field_id:
                return field
        raise KeyError(field_id)

    @staticmethod
    def _edited(descriptor: ContainerDescriptor, tag: str | None, attrs: str | None) -> ContainerDescriptor:
        changes = {}
        if tag is not None:
            changes['tag'] = tag
        if attrs is not None:
            changes['attrs'] = attrs
        return ContainerDescriptor.model_validate({**descriptor.model_dump(), **changes})
