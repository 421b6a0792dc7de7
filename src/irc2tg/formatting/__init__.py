"""Message formatting and splitting for IRC <-> Telegram relaying."""

from irc2tg.formatting.irc_message_split import split_irc_message
from irc2tg.formatting.irc_to_telegram import format_irc_to_telegram
from irc2tg.formatting.telegram_to_irc import display_name, is_whitespace, telegram_to_irc_lines

__all__ = [
    "display_name",
    "format_irc_to_telegram",
    "is_whitespace",
    "split_irc_message",
    "telegram_to_irc_lines",
]
