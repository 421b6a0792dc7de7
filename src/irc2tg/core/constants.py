"""Protocol constants."""

from __future__ import annotations

from typing import Literal

# IRC
PRIVMSG = "PRIVMSG"
IRC_MAX_LINE_BYTES = 450
# Smallest configurable budget; leaves room for a truncated sender prefix plus text
IRC_MIN_LINE_BYTES = 64

# Telegram
ParseMode = Literal["HTML", "Markdown"]
PARSE_MODES: tuple[ParseMode, ...] = ("HTML", "Markdown")
DEFAULT_PARSE_MODE: ParseMode = "HTML"
BRIDGED_CHAT_KINDS = frozenset({"group", "supergroup"})

# Host lifecycle
CORE_UPDATE = "update"
PERIPHERALS_LOADED = "peripherals_loaded"

# Prefixes marking the protocol a relayed message came from
IRC_TAG = "(irc)"
TELEGRAM_TAG = "(tg)"
