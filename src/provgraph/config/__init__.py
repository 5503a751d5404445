"""
Configuration layer for provgraph.

Configuration is explicit (passed, not global) and typed; ``load_config``
reads defaults and ``PROVGRAPH_*`` environment overrides through Dynaconf.
"""

from provgraph.config.settings import (
    GraphConfig,
    LoggingConfig,
    ProvgraphConfig,
)
from provgraph.config.loader import load_config, configure_logging

__all__ = [
    "GraphConfig",
    "LoggingConfig",
    "ProvgraphConfig",
    "load_config",
    "configure_logging",
]
