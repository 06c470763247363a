"""Read-only, selector-queryable view of a sample HTML page."""

from bs4 import BeautifulSoup, Tag


class SampleDocument:
    """Wraps a parsed sample page for selector testing and link harvesting.

    The document is owned by the caller; nothing in scrapeforge mutates it.

    Attributes:
        soup: Parsed BeautifulSoup tree

    """

    def __init__(self, soup: BeautifulSoup):
        """Initialize the document.

        Args:
            soup: Parsed BeautifulSoup tree

        """
        self.soup = soup

    @classmethod
    def from_html(cls, html: str, parser: str = 'lxml') -> 'SampleDocument':
        """Parse raw HTML into a sample document.

        Generated scripts parse pages with Python's built-in "html.parser" so
        they run without lxml installed. Both parsers agree on well-formed
        markup, but they repair broken markup differently (lxml closes a
        <p> before a nested <div>, for example), so match counts on such a
        page can differ from what the script extracts. Pass
        parser='html.parser' to test against exactly the script's tree.

        Args:
            html: Raw HTML content
            parser: BeautifulSoup parser name. Defaults to 'lxml'.

        Returns:
            SampleDocument wrapping the parsed tree.

        """
        return cls(BeautifulSoup(html, parser))

    def select(self, selector: str, scope: Tag | None = None) -> list[Tag]:
        """Return every element matching a CSS selector.

        Args:
            selector: CSS selector
            scope: Element to search within. Defaults to the whole document.

        Returns:
            Matching elements in document order.

        Raises:
            soupsieve.SelectorSyntaxError: If the selector is malformed.

        """
        root = scope if scope is not None else self.soup
        return list(root.select(selector))

    def select_one(self, selector: str, scope: Tag | None = None) -> Tag | None:
        """Return the first element matching a CSS selector, or None."""
        root = scope if scope is not None else self.soup
        return root.select_one(selector)

    @staticmethod
    def text_of(element: Tag) -> str:
        """Stripped text content of an element."""
        return element.get_text(strip=True)

    @staticmethod
    def outer_html(element: Tag) -> str:
        """Outer markup of an element."""
        return str(element)

    @staticmethod
    def attribute(element: Tag, name: str) -> str:
        """Attribute value as a string ('' when absent).

        BeautifulSoup returns multi-valued attributes such as ``class`` as
        lists; those are joined with spaces.
        """
        value = element.get(name)
        if value is None:
            return ''
        if isinstance(value, list):
            return ' '.join(value)
        return str(value)
