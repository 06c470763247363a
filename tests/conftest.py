import pytest

from scrapeforge.core import SampleDocument
from scrapeforge.models import ContainerDescriptor, ExtractionConfig, FieldDescriptor


@pytest.fixture
def item_list_html():
    return """
    <!DOCTYPE html>
    <html>
    <head>
        <title>Catalogue</title>
    </head>
    <body>
        <nav>
            <a href="/">Home</a>
            <a href="">Empty link</a>
            <a name="top">Anchor without href</a>
        </nav>
        <div class="item">
            <h2>Alpha</h2>
            <span class="price">10</span>
            <a class="more" href="/items/alpha">Read more</a>
        </div>
        <div class="item">
            <h2>Beta</h2>
            <span class="price">20</span>
            <a class="more" href="https://other.example.com/beta">Read more</a>
        </div>
        <div class="item">
            <p>No title in this one</p>
        </div>
        <ul class="pager">
            <li class="next"><a href="/page/2">Next</a></li>
        </ul>
    </body>
    </html>
    """


@pytest.fixture
def item_document(item_list_html):
    return SampleDocument.from_html(item_list_html)


@pytest.fixture
def structured_extraction():
    return ExtractionConfig(
        mode='structured',
        container=ContainerDescriptor(tag='div', attrs='class=item'),
        fields=[
            FieldDescriptor(name='title', tag='h2'),
            FieldDescriptor(name='price', tag='span', attrs='class="price"'),
        ],
    )


@pytest.fixture
def simple_extraction():
    return ExtractionConfig(mode='simple', fields=[FieldDescriptor(name='headline', tag='h2')])


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line('markers', 'integration: marks tests as integration tests')
    config.addinivalue_line('markers', 'unit: marks tests as unit tests')


def pytest_collection_modifyitems(config, items):
    """Apply directory-based marks to collected test items."""
    for item in items:
        file_path = str(item.path)

        if '/tests/integration/' in file_path:
            item.add_marker(pytest.mark.integration)
        elif '/tests/unit/' in file_path:
            item.add_marker(pytest.mark.unit)
