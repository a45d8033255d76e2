# lightbars/core/store.py
"""
Template store adapters: resolve a relative template path to raw source text.

read() raises FileNotFoundError when the path does not exist; the engine
turns that into TemplateNotFound.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Mapping, Optional
import structlog

log = structlog.get_logger(__name__)

class TemplateStore(ABC):
    @abstractmethod
    def exists(self, path: str) -> bool:
        ...

    @abstractmethod
    def read(self, path: str) -> str:
        ...

class FileSystemTemplateStore(TemplateStore):
    """Reads utf-8 templates from files below a single directory."""
    def __init__(self, template_dir: Path):
        self.template_dir = Path(template_dir).resolve()

    def _full_path(self, path: str) -> Optional[Path]:
        candidate = (self.template_dir / path).resolve()
        if not candidate.is_relative_to(self.template_dir):
            log.warning("template_path_outside_template_dir", path=path, template_dir=str(self.template_dir))
            return None
        return candidate

    def exists(self, path: str) -> bool:
        full_path = self._full_path(path)
        return full_path is not None and full_path.is_file()

    def read(self, path: str) -> str:
        full_path = self._full_path(path)
        if full_path is None or not full_path.is_file():
            raise FileNotFoundError(f"no template file '{path}' under {self.template_dir}")
        log.debug("reading_template_file", path=str(full_path))
        return full_path.read_text(encoding="utf-8")

class InMemoryTemplateStore(TemplateStore):
    """Serves templates from a dict; handy for embedded presets and tests."""
    def __init__(self, templates: Optional[Mapping[str, str]] = None):
        self.templates: Dict[str, str] = dict(templates or {})

    def exists(self, path: str) -> bool:
        return path in self.templates

    def read(self, path: str) -> str:
        try:
            return self.templates[path]
        except KeyError:
            raise FileNotFoundError(f"no template named '{path}'") from None
