"""
Engine configuration.

Defaults live in frozen dataclasses; an optional ``dfa.yaml`` file and
explicit overrides are layered on top by the loader.
"""
from .defaults import EngineConfig, get_default_config
from .loader import ConfigLoader, get_engine_config, set_engine_config

__all__ = [
    "ConfigLoader",
    "EngineConfig",
    "get_default_config",
    "get_engine_config",
    "set_engine_config",
]
