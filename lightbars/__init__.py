"""lightbars: a small Handlebars-flavoured template engine for HTML and XML documents."""
__version__ = "0.1.0"

from lightbars.core.store import TemplateStore, FileSystemTemplateStore, InMemoryTemplateStore
from lightbars.core.templating import TemplateEngine, TemplateCache, process_template
from lightbars.exceptions import TemplateError, TemplateNotFound, TemplateSyntaxError

__all__ = [
    "TemplateEngine",
    "TemplateCache",
    "TemplateStore",
    "FileSystemTemplateStore",
    "InMemoryTemplateStore",
    "process_template",
    "TemplateError",
    "TemplateNotFound",
    "TemplateSyntaxError",
]
