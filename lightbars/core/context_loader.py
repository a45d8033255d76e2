# lightbars/core/context_loader.py
"""
Builds a render context from data files (JSON, YAML, TOML) and KEY=VALUE
variables given on the command line.
"""
import json
from pathlib import Path
from typing import Any, Dict, Iterable, Sequence
import structlog
import toml
import yaml

from lightbars.exceptions import ContextError

log = structlog.get_logger(__name__)

def _parse_json(text: str) -> Any: return json.loads(text)
def _parse_yaml(text: str) -> Any: return yaml.safe_load(text)
def _parse_toml(text: str) -> Any: return toml.loads(text)

CONTEXT_FILE_PARSERS = {
    ".json": _parse_json,
    ".yaml": _parse_yaml,
    ".yml": _parse_yaml,
    ".toml": _parse_toml,
}

def load_context_file(path: Path) -> Dict[str, Any]:
    """Parses one context file, chosen by extension; the top level must be a mapping."""
    parser = CONTEXT_FILE_PARSERS.get(path.suffix.lower())
    if parser is None:
        raise ContextError(
            f"Unsupported context file type '{path.suffix}' for {path}. "
            f"Use one of: {', '.join(sorted(CONTEXT_FILE_PARSERS))}."
        )
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ContextError(f"Failed to read context file {path}: {e}") from e
    try:
        data = parser(text)
    except (json.JSONDecodeError, yaml.YAMLError, toml.TomlDecodeError) as e:
        log.error("context_file_parse_error", path=str(path), error=str(e))
        raise ContextError(f"Failed to parse context file {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ContextError(f"Context file {path} must contain a mapping at the top level, got {type(data).__name__}.")
    log.debug("context_file_loaded", path=str(path), keys=list(data.keys()))
    return data

def parse_user_vars(raw_vars: Iterable[str]) -> Dict[str, str]:
    # turns ("k=v", ...) into {"k": "v"}; later duplicates win.
    user_vars: Dict[str, str] = {}
    for raw in raw_vars:
        if "=" not in raw:
            raise ContextError(f"Invalid variable '{raw}'. Expected KEY=VALUE.")
        key, value = raw.split("=", 1)
        key = key.strip()
        if not key:
            raise ContextError(f"Invalid variable '{raw}'. Key must not be empty.")
        user_vars[key] = value
    return user_vars

def build_render_context(context_files: Sequence[Path] = (), raw_vars: Iterable[str] = ()) -> Dict[str, Any]:
    """Shallow-merges context files in order, then command-line variables on top."""
    context: Dict[str, Any] = {}
    for path in context_files:
        context.update(load_context_file(Path(path)))
    context.update(parse_user_vars(raw_vars))
    log.info("render_context_built", files=len(context_files), keys=len(context))
    return context
