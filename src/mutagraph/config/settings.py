from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Literal, Optional

from dynaconf import Dynaconf

from mutagraph.config.constants import DEFAULTS, DELETE_EDGE_POLICIES


logger = logging.getLogger("mutagraph.config")


@dataclass(frozen=True)
class StoreConfig:
    """
    Policy for a single graph instance.

    Passed explicitly to each GraphMutator; there is no process-wide
    configuration object.
    """

    edge_separator: str = DEFAULTS["EDGE_SEPARATOR"]
    delete_edge_policy: Literal["all", "first"] = DEFAULTS["DELETE_EDGE_POLICY"]
    history_limit: int = DEFAULTS["HISTORY_LIMIT"]
    default_node_type: Optional[str] = DEFAULTS["DEFAULT_NODE_TYPE"]

    def __post_init__(self) -> None:
        if not self.edge_separator or self.edge_separator.isspace():
            raise ValueError("edge_separator must be a non-blank string")
        if self.delete_edge_policy not in DELETE_EDGE_POLICIES:
            raise ValueError(
                f"delete_edge_policy must be one of {DELETE_EDGE_POLICIES}, "
                f"got {self.delete_edge_policy!r}"
            )
        if self.history_limit < 0:
            raise ValueError("history_limit must be >= 0")


def load_config(**overrides: Any) -> StoreConfig:
    """
    Build a StoreConfig from MUTAGRAPH_* environment variables (and a
    .env file, if present), falling back to DEFAULTS.

    Keyword overrides take precedence over the environment.
    """
    settings = Dynaconf(
        envvar_prefix="MUTAGRAPH",
        load_dotenv=True,
        settings_files=[],
    )

    values = {
        "edge_separator": settings.get("EDGE_SEPARATOR", DEFAULTS["EDGE_SEPARATOR"]),
        "delete_edge_policy": settings.get(
            "DELETE_EDGE_POLICY",
            DEFAULTS["DELETE_EDGE_POLICY"],
        ),
        "history_limit": int(settings.get("HISTORY_LIMIT", DEFAULTS["HISTORY_LIMIT"])),
        "default_node_type": settings.get(
            "DEFAULT_NODE_TYPE",
            DEFAULTS["DEFAULT_NODE_TYPE"],
        ),
    }
    values.update(overrides)

    logger.debug("loaded store config: %s", values)
    return StoreConfig(**values)
