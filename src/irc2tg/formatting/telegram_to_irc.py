"""Telegram -> IRC: sender naming and line splitting."""

from __future__ import annotations

from irc2tg.core.constants import IRC_MAX_LINE_BYTES, TELEGRAM_TAG
from irc2tg.events import TelegramUser
from irc2tg.formatting.irc_message_split import _valid_prefix, split_irc_message

_WHITESPACE = frozenset(" \t\n")


def is_whitespace(s: str) -> bool:
    """True if s is empty or made only of spaces, tabs and newlines."""
    return all(c in _WHITESPACE for c in s)


def display_name(user: TelegramUser) -> str:
    """Prefer the username; otherwise first name plus last name when present."""
    if user.username:
        return user.username
    name = user.first_name
    if user.last_name:
        name += " " + user.last_name
    return name


def _prefix(sender: str, max_bytes: int) -> str:
    """Build "(tg) sender : ", shortening sender so the prefix fills at most half a line."""
    prefix = f"{TELEGRAM_TAG} {sender} : "
    overflow = len(prefix.encode("utf-8")) - max_bytes // 2
    if overflow <= 0:
        return prefix
    name = sender.encode("utf-8")
    name = _valid_prefix(name[: max(len(name) - overflow, 0)])
    return f"{TELEGRAM_TAG} {name.decode('utf-8').rstrip()} : "


def telegram_to_irc_lines(
    sender: str,
    text: str,
    max_bytes: int = IRC_MAX_LINE_BYTES,
) -> list[str]:
    """Turn a Telegram message into prefixed IRC lines.

    One line per non-blank input line; lines over max_bytes (prefix included) are split
    at word boundaries and every chunk keeps the "(tg) sender : " prefix. A sender name
    too long for the prefix to leave half the line for text is truncated.
    """
    prefix = _prefix(sender, max_bytes)
    budget = max(max_bytes - len(prefix.encode("utf-8")), 1)
    lines: list[str] = []
    for line in text.split("\n"):
        # Telegram clients may send CRLF; a bare CR would end the IRC line early
        line = line.replace("\r", "")
        if is_whitespace(line):
            continue
        for chunk in split_irc_message(line, max_bytes=budget):
            if not is_whitespace(chunk):
                lines.append(prefix + chunk)
    return lines
