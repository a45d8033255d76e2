# lightbars/core/templating/cache.py
"""Thread-safe map of resolved template name to raw source text."""
import threading
from typing import Dict, Optional
import structlog

log = structlog.get_logger(__name__)

class TemplateCache:
    """Holds raw template source keyed by resolved name until clear() is called."""
    def __init__(self):
        self._entries: Dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, resolved_name: str) -> Optional[str]:
        with self._lock:
            return self._entries.get(resolved_name)

    def put(self, resolved_name: str, source: str):
        with self._lock:
            self._entries[resolved_name] = source

    def clear(self):
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        log.debug("template_cache_cleared", entries_dropped=count)

    def __contains__(self, resolved_name: str) -> bool:
        with self._lock:
            return resolved_name in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
