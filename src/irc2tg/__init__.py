"""irc2tg: IRC <-> Telegram group relay processor."""

__version__ = "0.1.0"
