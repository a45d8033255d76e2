# lightbars/core/templating/renderer.py
"""
Contains the TemplateEngine class responsible for resolving template names
against a store, caching their source, and rendering them with a context.
"""
from pathlib import PurePosixPath
from typing import Any, List, Mapping, Optional, Tuple
import structlog

from lightbars.config.settings import EngineConfig, DEFAULT_MAX_NESTING_DEPTH
from lightbars.core.store import TemplateStore, FileSystemTemplateStore
from lightbars.exceptions import TemplateError, TemplateNotFound, TemplateSyntaxError

from .cache import TemplateCache
from .evaluator import render_nodes
from .nodes import Template
from .parser import parse

log = structlog.get_logger(__name__)

def process_template(source: str, context: Optional[Mapping[str, Any]] = None,
                     source_name: str = "<string>",
                     max_depth: int = DEFAULT_MAX_NESTING_DEPTH) -> str:
    """Renders template source with a context. Pure: no store access, no caching."""
    template = parse(source, source_name=source_name, max_depth=max_depth)
    return render_nodes(template.nodes, context or {})

class TemplateEngine:
    """Resolves, caches and renders named templates from a TemplateStore."""
    def __init__(self, store: Optional[TemplateStore] = None, config: Optional[EngineConfig] = None,
                 cache: Optional[TemplateCache] = None):
        self.config = config or EngineConfig()
        self.store = store or FileSystemTemplateStore(self.config.template_dir)
        self.cache = cache if cache is not None else TemplateCache()

    def candidate_names(self, name: str) -> List[str]:
        if PurePosixPath(name).suffix:
            return [name]
        return [f"{name}{ext}" for ext in self.config.extensions]

    def resolve(self, name: str) -> str:
        """Returns the first candidate name the store has; raises TemplateNotFound otherwise."""
        candidates = self.candidate_names(name)
        if len(candidates) == 1:
            return candidates[0]
        for candidate in candidates:
            if self.store.exists(candidate):
                log.debug("template_resolved", name=name, resolved=candidate)
                return candidate
        log.warning("template_resolution_failed", name=name, attempted=candidates)
        raise TemplateNotFound(name, candidates)

    def load_source(self, name: str) -> Tuple[str, str]:
        """Returns (resolved_name, source), consulting the cache per the cache policy."""
        resolved_name = self.resolve(name)
        use_cache = self.config.cache_policy.is_enabled()

        if use_cache:
            cached_source = self.cache.get(resolved_name)
            if cached_source is not None:
                log.debug("template_cache_hit", resolved=resolved_name)
                return resolved_name, cached_source

        try:
            source = self.store.read(resolved_name)
        except OSError as e:
            log.warning("template_read_failed", resolved=resolved_name, error=str(e))
            raise TemplateNotFound(name, self.candidate_names(name)) from e
        except UnicodeDecodeError as e:
            log.error("template_decode_failed", resolved=resolved_name, error=str(e))
            raise TemplateError(f"Template '{resolved_name}' is not valid utf-8: {e}") from e

        if use_cache:
            self.cache.put(resolved_name, source)
            log.debug("template_cached", resolved=resolved_name)
        return resolved_name, source

    def compile(self, source: str, source_name: str = "<string>") -> Template:
        return parse(source, source_name=source_name, max_depth=self.config.max_nesting_depth)

    def process_template(self, source: str, context: Optional[Mapping[str, Any]] = None,
                         source_name: str = "<string>") -> str:
        return process_template(source, context, source_name=source_name,
                                max_depth=self.config.max_nesting_depth)

    def render(self, name: str, context: Optional[Mapping[str, Any]] = None) -> str:
        """Renders the named template. Raises TemplateNotFound, TemplateSyntaxError or TemplateError."""
        resolved_name, source = self.load_source(name)
        context = context or {}
        log.info("rendering_template", template=resolved_name, context_keys=list(context.keys()))
        try:
            rendered = self.process_template(source, context, source_name=resolved_name)
        except TemplateSyntaxError as e:
            log.error("template_render_failed", template=resolved_name, error=str(e))
            raise
        log.debug("template_rendered_successfully", template=resolved_name, length=len(rendered))
        return rendered

    def clear_cache(self):
        self.cache.clear()
