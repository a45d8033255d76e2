# lightbars/core/templating/__init__.py
"""
Templating module for lightbars.

Provides the TemplateEngine for resolving and rendering named templates, the
pure process_template function, and the parse step for syntax checking.
"""
from .renderer import TemplateEngine, process_template
from .cache import TemplateCache
from .parser import parse

__all__ = [
    "TemplateEngine",
    "TemplateCache",
    "process_template",
    "parse",
]
