from __future__ import annotations

import logging
from typing import Any, Tuple

from dynaconf import Dynaconf

from provgraph.config.constants import DEFAULTS
from provgraph.config.settings import GraphConfig, LoggingConfig, ProvgraphConfig


def _parse_csv(value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(str(v).strip() for v in value if str(v).strip())
    if isinstance(value, str):
        return tuple(v.strip() for v in value.split(",") if v.strip())
    return ()


def load_config(**overrides: Any) -> ProvgraphConfig:
    """
    Build the configuration from DEFAULTS, ``PROVGRAPH_*`` environment
    variables and a ``.env`` file, in increasing order of precedence.

    Keyword overrides use the same keys as DEFAULTS and win over all.
    """
    settings = Dynaconf(
        envvar_prefix="PROVGRAPH",
        load_dotenv=True,
        settings_files=[],
    )
    for key, value in DEFAULTS.items():
        if not settings.exists(key):
            settings.set(key, value)
    for key, value in overrides.items():
        settings.set(key, value)

    return ProvgraphConfig(
        graph=GraphConfig(
            indices=_parse_csv(settings.get("GRAPH_INDICES")),
            walk_workers=int(settings.get("GRAPH_WALK_WORKERS")),
            default_direction=settings.get("GRAPH_DEFAULT_DIRECTION"),
        ),
        logging=LoggingConfig(level=str(settings.get("LOG_LEVEL")).upper()),
    )


def configure_logging(config: ProvgraphConfig) -> logging.Logger:
    logger = logging.getLogger("provgraph")
    logger.setLevel(config.logging.level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(config.logging.format))
        logger.addHandler(handler)
    return logger
