"""IRC -> Telegram: render a channel message for a Telegram group."""

from __future__ import annotations

import html
import re

from irc2tg.core.constants import IRC_TAG, ParseMode

# IRC formatting control codes: bold, color (with optional fg,bg), reset, italic, underline, etc.
_IRC_CONTROL_RE = re.compile(r"\x03(?:\d{1,2}(?:,\d{1,2})?)?|[\x02\x0f\x16\x1d\x1e\x1f]")

# Characters with meaning in Telegram's legacy Markdown mode
_MARKDOWN_SPECIAL_RE = re.compile(r"([_*`\[])")


def strip_irc_formatting(text: str) -> str:
    """Remove mIRC color and style control codes."""
    return _IRC_CONTROL_RE.sub("", text)


def _escape_markdown(text: str) -> str:
    return _MARKDOWN_SPECIAL_RE.sub(r"\\\1", text)


def format_irc_to_telegram(sender: str, text: str, parse_mode: ParseMode = "HTML") -> str:
    """Build the Telegram message body for an IRC message.

    HTML renders as ``<b>(irc) nick :</b> text``; Markdown as ``*(irc) nick :* text``, or
    ``*(irc)* nick *:* text`` when the nick itself needs escaping.
    Sender and text are escaped for the chosen mode so user content never turns into markup.
    """
    text = strip_irc_formatting(text)
    if parse_mode == "Markdown":
        if _MARKDOWN_SPECIAL_RE.search(sender):
            # Legacy Markdown has no escapes inside an entity, so the name goes outside the bold
            return f"*{IRC_TAG}* {_escape_markdown(sender)} *:* {_escape_markdown(text)}"
        return f"*{IRC_TAG} {sender} :* {_escape_markdown(text)}"
    return f"<b>{IRC_TAG} {html.escape(sender, quote=False)} :</b> {html.escape(text, quote=False)}"
