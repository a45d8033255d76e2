# lightbars/config/loader.py
"""
Handles loading and merging of engine configuration from TOML files.
"""
import toml
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import fields as dataclass_fields
import structlog

from lightbars.exceptions import ConfigError

from .settings import EngineConfig, CachePolicy

log = structlog.get_logger(__name__)

PROJECT_CONFIG_FILENAMES = [".lightbars.toml", "lightbars.toml", "pyproject.toml"]
USER_CONFIG_DIR = Path.home() / ".config" / "lightbars"
USER_CONFIG_FILE = USER_CONFIG_DIR / "config.toml"

CONFIG_KEY_TO_ENGINECONFIG_ATTR_MAP: Dict[str, str] = {
    "template_dir": "template_dir",
    "extensions": "extensions",
    "cache_policy": "cache_policy",
    "max_nesting_depth": "max_nesting_depth",
    "max_depth": "max_nesting_depth",
}

def _load_toml_file_data(file_path: Path) -> Dict[str, Any]:
    if not file_path.is_file(): return {}
    log.debug("loading_toml_config_file", path=str(file_path))
    try:
        data = toml.load(file_path)
    except (toml.TomlDecodeError, OSError) as e:
        log.error("config_file_load_error", path=str(file_path), error=str(e))
        raise ConfigError(f"Could not read config file {file_path}: {e}") from e
    return data.get("tool", {}).get("lightbars", {}) if file_path.name == "pyproject.toml" else data

def load_and_merge_configs(search_dir: Optional[Path] = None) -> Dict[str, Any]:
    """Merges the user config with the first project config found in search_dir (default: cwd)."""
    merged_toml_data: Dict[str, Any] = {}
    if USER_CONFIG_FILE.is_file():
        log.info("loading_user_global_config", path=str(USER_CONFIG_FILE))
        merged_toml_data.update(_load_toml_file_data(USER_CONFIG_FILE))

    base_dir = search_dir or Path.cwd()
    for filename in PROJECT_CONFIG_FILENAMES:
        candidate = base_dir / filename
        if candidate.is_file():
            project_settings = _load_toml_file_data(candidate)
            if not project_settings:
                continue
            log.info("loading_project_local_config", path=str(candidate))
            user_profiles = merged_toml_data.get("profiles", {})
            project_profiles = project_settings.pop("profiles", {})
            if project_profiles and isinstance(user_profiles, dict) and isinstance(project_profiles, dict):
                user_profiles.update(project_profiles)
                merged_toml_data["profiles"] = user_profiles
            merged_toml_data.update(project_settings)
            break
    if not merged_toml_data: log.debug("no_configuration_files_loaded")
    return merged_toml_data

def build_engine_config(raw_config: Dict[str, Any], profile_name: Optional[str] = None,
                        **overrides: Any) -> EngineConfig:
    """
    Layers toml values, then the named profile, then non-None keyword overrides
    (typically from the command line) into an EngineConfig.
    """
    effective_options: Dict[str, Any] = {}
    for toml_k, attr in CONFIG_KEY_TO_ENGINECONFIG_ATTR_MAP.items():
        if toml_k in raw_config:
            effective_options[attr] = raw_config[toml_k]

    if profile_name:
        profile_values = raw_config.get("profiles", {}).get(profile_name)
        if not isinstance(profile_values, dict):
            raise ConfigError(f"Config profile '{profile_name}' not found.")
        log.info("applying_profile_settings", profile=profile_name)
        for toml_k, attr in CONFIG_KEY_TO_ENGINECONFIG_ATTR_MAP.items():
            if toml_k in profile_values:
                effective_options[attr] = profile_values[toml_k]

    valid_fields = {f.name for f in dataclass_fields(EngineConfig)}
    for attr, value in overrides.items():
        if attr not in valid_fields:
            raise ConfigError(f"Unknown engine option '{attr}'.")
        if value is not None:
            effective_options[attr] = value

    policy = effective_options.get("cache_policy")
    if isinstance(policy, str):
        parsed_policy = CachePolicy.from_string(policy)
        if parsed_policy is None:
            raise ConfigError(f"Invalid cache_policy '{policy}'. Expected one of: {', '.join(p.value for p in CachePolicy)}.")
        effective_options["cache_policy"] = parsed_policy

    depth = effective_options.get("max_nesting_depth")
    if depth is not None and (isinstance(depth, bool) or not isinstance(depth, int) or depth < 1):
        raise ConfigError(f"max_nesting_depth must be a positive integer, got {depth!r}.")

    # EngineConfig rejects wrongly typed template_dir, cache_policy and extensions.
    config = EngineConfig(**effective_options)
    log.debug("engine_config_built", template_dir=str(config.template_dir),
              cache_policy=config.cache_policy.value, max_nesting_depth=config.max_nesting_depth)
    return config
