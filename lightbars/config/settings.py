import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Mapping, Optional
import structlog

from lightbars.exceptions import ConfigError

log = structlog.get_logger(__name__)

ENVIRONMENT_VARIABLE = "LIGHTBARS_ENV"
PRODUCTION_ENVIRONMENT = "production"

class CachePolicy(Enum):
    # defines when resolved template source is kept in the engine's cache.
    ENABLED = "enabled"
    DISABLED = "disabled"
    ENVIRONMENT = "environment"

    @classmethod
    def from_string(cls, s: Optional[str]) -> Optional["CachePolicy"]:
        if not s:
            return None
        try:
            return cls(s.lower())
        except ValueError:
            log.warning("invalid_cache_policy_string", input_string=s)
            return None

    def is_enabled(self, environ: Optional[Mapping[str, str]] = None) -> bool:
        if self is CachePolicy.ENABLED:
            return True
        if self is CachePolicy.DISABLED:
            return False
        env = os.environ if environ is None else environ
        return env.get(ENVIRONMENT_VARIABLE, "").strip().lower() == PRODUCTION_ENVIRONMENT

DEFAULT_TEMPLATE_DIR = Path("templates")
DEFAULT_TEMPLATE_EXTENSIONS = (".html", ".xml", ".txt")
DEFAULT_CACHE_POLICY = CachePolicy.ENVIRONMENT
DEFAULT_MAX_NESTING_DEPTH = 64

@dataclass
class EngineConfig:
    # holds all configuration parameters for a template engine instance.
    template_dir: Path = DEFAULT_TEMPLATE_DIR
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_TEMPLATE_EXTENSIONS))
    cache_policy: CachePolicy = DEFAULT_CACHE_POLICY
    max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH

    def __post_init__(self):
        # normalizes values that may arrive as plain strings from toml or the cli.
        if not isinstance(self.template_dir, (str, Path)):
            raise ConfigError(f"template_dir must be a path string, got {self.template_dir!r}.")
        self.template_dir = Path(self.template_dir)
        if isinstance(self.cache_policy, str):
            self.cache_policy = CachePolicy.from_string(self.cache_policy) or DEFAULT_CACHE_POLICY
        if not isinstance(self.cache_policy, CachePolicy):
            raise ConfigError(f"cache_policy must be one of: {', '.join(p.value for p in CachePolicy)}; got {self.cache_policy!r}.")
        if not isinstance(self.extensions, (list, tuple)) or not all(isinstance(ext, str) for ext in self.extensions):
            raise ConfigError(f"extensions must be a list of strings, got {self.extensions!r}.")
        self.extensions = [ext if ext.startswith(".") else f".{ext}" for ext in self.extensions]
