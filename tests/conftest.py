import logging

import pytest
import structlog

from lightbars.core.store import InMemoryTemplateStore


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo CLI logging configuration so handlers never outlive a CliRunner stream."""
    yield
    structlog.reset_defaults()
    logging.getLogger("lightbars").handlers.clear()


@pytest.fixture
def memory_store() -> InMemoryTemplateStore:
    return InMemoryTemplateStore({
        "test.html": "<h1>{{title}}</h1>",
        "page.html": "<p>html {{title}}</p>",
        "page.xml": "<p>xml {{title}}</p>",
        "feed.xml": "<rss><title>{{title}}</title></rss>",
        "notes.txt": "notes: {{title}}",
        "broken.html": "<div>{{#if open}}never closed</div>",
    })
