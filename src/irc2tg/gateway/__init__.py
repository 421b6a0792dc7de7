"""Gateway: link table, endpoint ports, readiness, processor."""

from irc2tg.gateway.endpoints import EndpointLookup, EndpointRegistry, IRCGateway, TelegramGateway
from irc2tg.gateway.links import Link, LinkTable
from irc2tg.gateway.processor import Processor
from irc2tg.gateway.readiness import Readiness, ReadinessState

__all__ = [
    "EndpointLookup",
    "EndpointRegistry",
    "IRCGateway",
    "Link",
    "LinkTable",
    "Processor",
    "Readiness",
    "ReadinessState",
    "TelegramGateway",
]
