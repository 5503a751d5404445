from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Tuple

# ---------------------------------------------------------------------
# Graph storage & traversal
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class GraphConfig:
    """
    Controls how a storage graph is indexed and walked.
    """

    indices: Tuple[str, ...] = ()
    walk_workers: int = 4
    default_direction: Literal["out", "in"] = "out"

    def __post_init__(self) -> None:
        if self.walk_workers < 1:
            raise ValueError(f"walk_workers must be at least 1, got {self.walk_workers}")
        if self.default_direction not in ("out", "in"):
            raise ValueError(
                f"default_direction must be 'out' or 'in', got {self.default_direction!r}"
            )


# ---------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class LoggingConfig:
    level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = "WARNING"
    format: str = "%(asctime)s %(name)-20s %(levelname)-8s: %(message)s"


# ---------------------------------------------------------------------
# Root configuration object
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class ProvgraphConfig:
    """
    Root configuration object for provgraph.

    Constructed explicitly (or by ``load_config``) and passed to the
    storage graph; nothing reads configuration from global state.
    """

    graph: GraphConfig = field(default_factory=GraphConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
