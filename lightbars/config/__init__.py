from .settings import EngineConfig, CachePolicy
from .loader import load_and_merge_configs, build_engine_config

__all__ = ["EngineConfig", "CachePolicy", "load_and_merge_configs", "build_engine_config"]
