"""Mock gateways for testing the processor without real protocol connections."""

from __future__ import annotations

from irc2tg.core.constants import ParseMode
from irc2tg.gateway.endpoints import IRCGateway, TelegramGateway


class MockIRCGateway(IRCGateway):
    """IRC gateway that records joins and PRIVMSGs."""

    def __init__(self, identifier: str, *, fail_join: bool = False, fail_on: set[str] | None = None) -> None:
        self._identifier = identifier
        self.fail_join = fail_join
        # Lines whose text contains any of these substrings raise on send
        self.fail_on = fail_on or set()
        self.joined: list[str] = []
        self.sent: list[tuple[str, str]] = []

    @property
    def identifier(self) -> str:
        return self._identifier

    async def join(self, channel: str) -> None:
        if self.fail_join:
            raise ConnectionError(f"cannot join {channel}")
        self.joined.append(channel)

    async def privmsg(self, channel: str, text: str) -> None:
        if any(marker in text for marker in self.fail_on):
            raise ConnectionError("send failed")
        self.sent.append((channel, text))

    def clear(self) -> None:
        self.joined.clear()
        self.sent.clear()


class MockTelegramGateway(TelegramGateway):
    """Telegram gateway that records sendMessage calls."""

    def __init__(self, identifier: str, *, fail: bool = False) -> None:
        self._identifier = identifier
        self.fail = fail
        self.sent: list[tuple[str, str, ParseMode]] = []

    @property
    def identifier(self) -> str:
        return self._identifier

    async def send_message(self, chat_id: str, text: str, parse_mode: ParseMode) -> str:
        if self.fail:
            raise ConnectionError("Telegram API unreachable")
        self.sent.append((chat_id, text, parse_mode))
        return str(len(self.sent))

    def clear(self) -> None:
        self.sent.clear()


class NotAGateway:
    """Peripheral registered under a link id that is neither gateway type."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
