"""Config schema and accessor."""

from __future__ import annotations

import os
from typing import Any

from loguru import logger

from irc2tg.core.constants import DEFAULT_PARSE_MODE, IRC_MAX_LINE_BYTES, IRC_MIN_LINE_BYTES, PARSE_MODES, ParseMode
from irc2tg.core.errors import RelayConfigurationError
from irc2tg.gateway.links import LinkTable

# Env keys that override config (loaded once per reload)
_ENV_OVERRIDE_KEYS = ("IRC2TG_TELEGRAM_PARSE_MODE",)


def _load_env_overrides() -> dict[str, str]:
    return {k: os.environ.get(k, "") for k in _ENV_OVERRIDE_KEYS}


class Config:
    """Config accessor. Validates links and options on reload."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data = data or {}
        self._env: dict[str, str] = _load_env_overrides()

    def reload(self, data: dict[str, Any], *, validate: bool = True) -> None:
        """Replace config data."""
        self._data = data or {}
        self._env = _load_env_overrides()
        if validate:
            self._validate()
        logger.debug("Config reloaded: {} links", len(self.links))

    def _validate(self) -> None:
        """Validate config structure; raise RelayConfigurationError on failure."""
        links = self._data.get("links")
        if links is not None and not isinstance(links, list):
            raise RelayConfigurationError(
                "links must be a list",
                code="invalid_links",
                details={"type": type(links).__name__},
            )
        self.link_table()
        _ = self.telegram_parse_mode
        raw_max = self._data.get("irc_max_line_bytes", IRC_MAX_LINE_BYTES)
        try:
            max_bytes = int(raw_max)
        except (TypeError, ValueError) as exc:
            raise RelayConfigurationError(
                "irc_max_line_bytes must be an integer",
                code="invalid_irc_max_line_bytes",
                details={"value": raw_max},
                original_error=exc,
            ) from exc
        if max_bytes < IRC_MIN_LINE_BYTES:
            raise RelayConfigurationError(
                f"irc_max_line_bytes must be at least {IRC_MIN_LINE_BYTES}",
                code="invalid_irc_max_line_bytes",
                details={"value": max_bytes},
            )
        patterns = self._data.get("content_filter_regex")
        if patterns is not None and (
            not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns)
        ):
            raise RelayConfigurationError(
                "content_filter_regex must be a list of strings",
                code="invalid_content_filter",
                details={"type": type(patterns).__name__},
            )

    @property
    def links(self) -> list[Any]:
        """Raw link records."""
        val = self._data.get("links")
        return val if isinstance(val, list) else []

    def link_table(self) -> LinkTable:
        """Validated link table built from the link records."""
        return LinkTable.from_records(self.links)

    @property
    def telegram_parse_mode(self) -> ParseMode:
        """Telegram formatting mode for relayed IRC messages ("HTML" or "Markdown")."""
        val = self._env.get("IRC2TG_TELEGRAM_PARSE_MODE") or self._data.get(
            "telegram_parse_mode", DEFAULT_PARSE_MODE
        )
        for mode in PARSE_MODES:
            if str(val).lower() == mode.lower():
                return mode
        raise RelayConfigurationError(
            f"unsupported telegram_parse_mode {val!r}",
            code="invalid_parse_mode",
            details={"value": val, "allowed": list(PARSE_MODES)},
        )

    @property
    def irc_max_line_bytes(self) -> int:
        """Payload byte budget for one PRIVMSG line."""
        return int(self._data.get("irc_max_line_bytes", IRC_MAX_LINE_BYTES))

    @property
    def content_filter_regex(self) -> list[str]:
        """Regex patterns; messages matching any are not bridged."""
        val = self._data.get("content_filter_regex")
        if isinstance(val, list):
            return list(val)
        return []
