"""Endpoint ports: the gateways the processor talks to, and how it finds them."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Protocol

from loguru import logger

from irc2tg.core.constants import ParseMode


class IRCGateway(ABC):
    """Source-protocol endpoint: joins channels and sends PRIVMSG lines."""

    @property
    @abstractmethod
    def identifier(self) -> str:
        """Gateway id as referenced by links."""
        ...

    @abstractmethod
    async def join(self, channel: str) -> None:
        """Join an IRC channel. Raises on failure."""
        ...

    @abstractmethod
    async def privmsg(self, channel: str, text: str) -> None:
        """Send one PRIVMSG line to a channel. Raises on failure."""
        ...


class TelegramGateway(ABC):
    """Destination-protocol endpoint: sends messages to chats."""

    @property
    @abstractmethod
    def identifier(self) -> str:
        """Gateway id as referenced by links."""
        ...

    @abstractmethod
    async def send_message(self, chat_id: str, text: str, parse_mode: ParseMode) -> str:
        """Send a message; chat_id is a numeric id or "@username". Returns the message id."""
        ...


class EndpointLookup(Protocol):
    """Host capability resolving live endpoints by configured id."""

    def get_peripheral(self, identifier: str) -> object | None:
        """Return the endpoint registered under identifier, or None."""
        ...


class EndpointRegistry:
    """Dict-backed EndpointLookup. Hosts register gateways as they come up."""

    def __init__(self) -> None:
        self._endpoints: dict[str, object] = {}

    def register(self, endpoint: IRCGateway | TelegramGateway) -> None:
        """Register an endpoint under its identifier, replacing any previous one."""
        if endpoint.identifier in self._endpoints:
            logger.warning("Endpoints: replacing endpoint {}", endpoint.identifier)
        self._endpoints[endpoint.identifier] = endpoint

    def unregister(self, identifier: str) -> None:
        self._endpoints.pop(identifier, None)

    def get_peripheral(self, identifier: str) -> object | None:
        return self._endpoints.get(identifier)
