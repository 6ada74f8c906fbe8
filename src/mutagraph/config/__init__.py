"""
Configuration layer for mutagraph.

Configuration is:
- Explicit (passed to each graph, never global)
- Typed (validated at construction time)
- Overridable from MUTAGRAPH_* environment variables via load_config()
"""

from mutagraph.config.settings import StoreConfig, load_config

__all__ = [
    "StoreConfig",
    "load_config",
]
