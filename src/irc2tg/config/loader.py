"""Read the relay's YAML config file."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from irc2tg.core.errors import RelayConfigurationError


def _warn_if_inert(path: Path, data: dict[str, Any]) -> None:
    # A processor built from this config would accept events and forward none
    links = data.get("links")
    if "links" not in data:
        logger.warning("Config {} has no links key; nothing will be relayed", path)
    elif isinstance(links, list) and not links:
        logger.warning("Config {} lists no links; nothing will be relayed", path)


def load_config(path: str | Path) -> dict[str, Any]:
    """Parse the config file at path into a dict of relay settings.

    A missing or empty file gives ``{}``. A top level that is not a mapping raises
    RelayConfigurationError ("invalid_config_structure"). yaml.YAMLError propagates.
    Structure beyond the top level is checked by Config.reload.
    """
    path = Path(path)
    if not path.exists():
        logger.warning("Config file not found: {}", path)
        return {}

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        logger.error("Failed to parse config {}: {}", path, exc)
        raise

    if data is None:
        logger.warning("Config file {} is empty; nothing will be relayed", path)
        return {}
    if not isinstance(data, dict):
        raise RelayConfigurationError(
            f"config {path} must be a mapping at the top level",
            code="invalid_config_structure",
            details={"path": str(path), "type": type(data).__name__},
        )
    _warn_if_inert(path, data)
    return data


def load_config_with_env(path: str | Path) -> dict[str, Any]:
    """load_config after pulling a local .env into the environment (for IRC2TG_* overrides)."""
    from dotenv import load_dotenv

    load_dotenv()
    return load_config(path)
