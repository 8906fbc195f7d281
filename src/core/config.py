"""
Runtime settings.

Values are read once from environment variables and exposed through SETTINGS:

- LINEAGE_PROTOCOL_VERSION: written into the version byte of new challenges.
- LINEAGE_NETWORK_ID: written into the network id byte of new challenges.
- LINEAGE_LOG_LEVEL: level used by configure_logging().
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Callable


def _get(name: str, default: Any, cast: Callable[[str], Any] | None = None) -> Any:
    env = os.environ.get(name)
    if env is None:
        return default
    return cast(env) if cast else env


@dataclass(frozen=True)
class Settings:
    protocol_version: int
    network_id: int
    log_level: str


SETTINGS = Settings(
    protocol_version=_get("LINEAGE_PROTOCOL_VERSION", 0, cast=int),
    network_id=_get("LINEAGE_NETWORK_ID", 0, cast=int),
    log_level=_get("LINEAGE_LOG_LEVEL", "WARNING").upper(),
)


def configure_logging(settings: Settings = SETTINGS) -> None:
    """Hook for applications embedding the ledger. Library modules only create named loggers."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
