"""Processor: the single-task event loop routing IRC <-> Telegram messages over the link table."""

from __future__ import annotations

import asyncio
import re
from collections.abc import Iterable
from pathlib import Path
from typing import TypeVar

from loguru import logger

from irc2tg.core.constants import (
    BRIDGED_CHAT_KINDS,
    DEFAULT_PARSE_MODE,
    IRC_MAX_LINE_BYTES,
    IRC_MIN_LINE_BYTES,
    PARSE_MODES,
    PRIVMSG,
    ParseMode,
)
from irc2tg.core.errors import ProcessorClosedError, ProcessorNotRunningError, RelayConfigurationError
from irc2tg.events import CoreEvent, IRCMessage, TelegramChat, TelegramUpdate, UnknownEvent
from irc2tg.formatting import display_name, format_irc_to_telegram, telegram_to_irc_lines
from irc2tg.gateway.endpoints import EndpointLookup, IRCGateway, TelegramGateway
from irc2tg.gateway.links import Link, LinkTable
from irc2tg.gateway.readiness import Readiness, ReadinessState

_GatewayT = TypeVar("_GatewayT", IRCGateway, TelegramGateway)

# Queue item marking the end of the event stream
_CLOSED = object()


def _chat_matches(chat: TelegramChat, group: str) -> bool:
    """True if the chat is the link's group, by numeric id or by "@username"."""
    if str(chat.id) == group:
        return True
    return bool(chat.username) and f"@{chat.username}" == group


def _compile_filters(patterns: Iterable[str]) -> list[re.Pattern[str]]:
    compiled: list[re.Pattern[str]] = []
    for pat in patterns:
        try:
            compiled.append(re.compile(pat))
        except re.error as exc:
            raise RelayConfigurationError(
                f"invalid content filter regex {pat!r}: {exc}",
                code="invalid_content_filter",
                details={"pattern": pat},
                original_error=exc,
            ) from exc
    return compiled


class Processor:
    """Relays PRIVMSGs from linked IRC channels to Telegram groups and back.

    Events are consumed one at a time from an unbounded queue, in arrival order. Nothing is
    forwarded until the host announces that all peripherals are loaded; at that point the
    IRC channels of every link are joined once. Per-link failures (unknown gateway, wrong
    gateway type, failed send) are logged and never stop the loop; only close() does.
    """

    def __init__(
        self,
        identifier: str,
        links: LinkTable | Iterable[Link],
        endpoints: EndpointLookup,
        *,
        parse_mode: ParseMode = DEFAULT_PARSE_MODE,
        irc_max_line_bytes: int = IRC_MAX_LINE_BYTES,
        content_filter: Iterable[str] = (),
    ) -> None:
        if not isinstance(identifier, str) or not identifier:
            raise RelayConfigurationError("identifier cannot have zero length", code="empty_identifier")
        if endpoints is None or not callable(getattr(endpoints, "get_peripheral", None)):
            raise RelayConfigurationError("endpoint lookup cannot be None", code="missing_endpoints")
        if parse_mode not in PARSE_MODES:
            raise RelayConfigurationError(
                f"unsupported parse mode {parse_mode!r}",
                code="invalid_parse_mode",
                details={"value": parse_mode},
            )
        if (
            isinstance(irc_max_line_bytes, bool)
            or not isinstance(irc_max_line_bytes, int)
            or irc_max_line_bytes < IRC_MIN_LINE_BYTES
        ):
            raise RelayConfigurationError(
                f"irc_max_line_bytes must be an integer of at least {IRC_MIN_LINE_BYTES}",
                code="invalid_irc_max_line_bytes",
                details={"value": irc_max_line_bytes},
            )

        self._identifier = identifier
        self._links = links if isinstance(links, LinkTable) else LinkTable(links)
        self._endpoints = endpoints
        self._parse_mode: ParseMode = parse_mode
        self._irc_max_line_bytes = irc_max_line_bytes
        self._content_filter = _compile_filters(content_filter)
        self._readiness = Readiness()
        self._queue: asyncio.Queue[object] = asyncio.Queue()
        self._closed = False
        self._loop: asyncio.AbstractEventLoop | None = None
        self._task: asyncio.Task | None = None
        logger.debug("Processor {}: initialized with {} links", identifier, len(self._links))

    @classmethod
    def from_config(
        cls,
        identifier: str,
        config_path: str | Path,
        endpoints: EndpointLookup,
    ) -> Processor:
        """Build a processor from a YAML config file. Raises RelayConfigurationError."""
        import yaml

        from irc2tg.config import Config, load_config_with_env

        path = Path(config_path)
        if not path.exists():
            raise RelayConfigurationError(
                f"config file not found: {path}",
                code="config_not_found",
                details={"path": str(path)},
            )
        try:
            data = load_config_with_env(path)
        except yaml.YAMLError as exc:
            raise RelayConfigurationError(
                f"could not parse config {path}",
                code="config_parse_error",
                details={"path": str(path)},
                original_error=exc,
            ) from exc

        config = Config()
        config.reload(data)
        return cls(
            identifier,
            config.link_table(),
            endpoints,
            parse_mode=config.telegram_parse_mode,
            irc_max_line_bytes=config.irc_max_line_bytes,
            content_filter=config.content_filter_regex,
        )

    @property
    def identifier(self) -> str:
        return self._identifier

    @property
    def links(self) -> LinkTable:
        return self._links

    @property
    def state(self) -> ReadinessState:
        return self._readiness.state

    @property
    def ready(self) -> bool:
        """Whether messages are being forwarded."""
        return self._readiness.ready

    @property
    def closed(self) -> bool:
        return self._closed

    # -- producer side --------------------------------------------------

    def submit(self, evt: object) -> None:
        """Enqueue one event. Never blocks; call from the processor's event loop."""
        if self._closed:
            raise ProcessorClosedError(
                f"processor {self._identifier} is closed",
                details={"event": type(evt).__name__},
            )
        self._queue.put_nowait(evt)

    def submit_threadsafe(self, evt: object) -> None:
        """Enqueue one event from a thread other than the one running the processor."""
        if self._loop is None:
            raise ProcessorNotRunningError(f"processor {self._identifier} is not running")
        if self._closed:
            raise ProcessorClosedError(f"processor {self._identifier} is closed")
        self._loop.call_soon_threadsafe(self._queue.put_nowait, evt)

    def close(self) -> None:
        """Close the queue. Events already submitted are still processed, then run() returns."""
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(_CLOSED)

    # -- lifecycle --------------------------------------------------------

    def start(self) -> asyncio.Task:
        """Start the event loop as a task on the running loop."""
        if self._task is None:
            self._task = asyncio.create_task(self.run(), name=f"irc2tg-processor-{self._identifier}")
        return self._task

    async def stop(self) -> None:
        """Close the queue and wait for the event loop to drain."""
        self.close()
        if self._task is not None:
            await self._task
            self._task = None

    async def run(self) -> None:
        """Consume events until the queue is closed."""
        self._loop = asyncio.get_running_loop()
        logger.debug("Processor {}: starting the event loop", self._identifier)
        while True:
            evt = await self._queue.get()
            try:
                if evt is _CLOSED:
                    break
                await self.handle(evt)
            except Exception as exc:
                logger.exception("Processor {}: failed to handle {}: {}", self._identifier, type(evt).__name__, exc)
            finally:
                self._queue.task_done()
        logger.debug("Processor {}: event loop stopped", self._identifier)

    async def handle(self, evt: object) -> None:
        """Route a single event."""
        logger.debug("Processor {}: received event of type {}", self._identifier, type(evt).__name__)
        if isinstance(evt, CoreEvent):
            await self._process_core_event(evt)
        elif isinstance(evt, IRCMessage):
            if self.ready:
                await self.forward_to_telegram(evt)
        elif isinstance(evt, TelegramUpdate):
            if self.ready:
                await self.forward_to_irc(evt)
        else:
            kind = evt.kind if isinstance(evt, UnknownEvent) else type(evt).__name__
            logger.error(
                "Processor {} received an unknown event type {} from endpoint {}",
                self._identifier,
                kind,
                getattr(evt, "source_id", "<unknown>"),
            )

    async def _process_core_event(self, evt: CoreEvent) -> None:
        if evt.peripherals_loaded:
            logger.debug("Processor {}: host reports all peripherals loaded", self._identifier)
            await self.activate()
            return
        logger.debug("Processor {}: ignoring core event {}/{}", self._identifier, evt.kind, evt.status)

    async def activate(self) -> None:
        """Become ready to forward and join the linked IRC channels. No-op when already ready."""
        if not self._readiness.activate():
            logger.debug("Processor {}: already ready, ignoring activation", self._identifier)
            return
        await self._join_irc_channels()
        logger.info("Processor {}: ready, forwarding over {} links", self._identifier, len(self._links))

    async def _join_irc_channels(self) -> None:
        for gateway_id, channel in self._links.irc_channels():
            gw = self._get_gateway(gateway_id, IRCGateway, "IRC")
            if gw is None:
                continue
            logger.debug("Processor {}: joining IRC channel {} on gateway {}", self._identifier, channel, gateway_id)
            try:
                await gw.join(channel)
            except Exception as exc:
                logger.warning(
                    "Processor {}: could not join IRC channel {} on gateway {}: {}",
                    self._identifier,
                    channel,
                    gateway_id,
                    exc,
                )

    # -- routing ----------------------------------------------------------

    def _get_gateway(self, identifier: str, expected: type[_GatewayT], label: str) -> _GatewayT | None:
        """Resolve a gateway through the host and check its type. None on any failure."""
        try:
            gw = self._endpoints.get_peripheral(identifier)
        except Exception as exc:
            logger.exception("Processor {}: lookup of gateway {} failed: {}", self._identifier, identifier, exc)
            return None
        if gw is None:
            logger.error("Processor {}: the {} gateway ID {} is not registered", self._identifier, label, identifier)
            return None
        if not isinstance(gw, expected):
            logger.error(
                "Processor {}: the {} gateway ID {} belongs to a {} instance",
                self._identifier,
                label,
                identifier,
                type(gw).__name__,
            )
            return None
        return gw

    def _filtered(self, text: str) -> bool:
        return any(pat.search(text) for pat in self._content_filter)

    async def forward_to_telegram(self, msg: IRCMessage) -> None:
        """Forward an IRC PRIVMSG to every Telegram group linked to its channel."""
        if msg.command != PRIVMSG:
            return
        text = msg.text
        if text is None:
            logger.debug("Processor {}: PRIVMSG from {} without text", self._identifier, msg.source_id)
            return
        if self._filtered(text):
            logger.debug("Processor {}: IRC message from {} matches content filter", self._identifier, msg.sender)
            return

        for link in self._links.find_links(msg.source_id):
            if msg.channel != link.irc_channel:
                continue
            tggw = self._get_gateway(link.telegram_gateway_id, TelegramGateway, "Telegram")
            if tggw is None:
                continue
            body = format_irc_to_telegram(msg.sender, text, self._parse_mode)
            try:
                await tggw.send_message(link.telegram_group, body, self._parse_mode)
            except Exception as exc:
                logger.exception(
                    "Processor {}: an error occurred while forwarding a message from IRC to Telegram: {}",
                    self._identifier,
                    exc,
                )

    async def forward_to_irc(self, update: TelegramUpdate) -> None:
        """Forward a Telegram group message, line by line, to every linked IRC channel."""
        msg = update.message
        if msg is None:
            logger.debug("Processor {}: Telegram update without a message", self._identifier)
            return
        if msg.sender is None:
            logger.debug("Processor {}: Telegram update with an anonymous message", self._identifier)
            return
        if not msg.text:
            logger.debug("Processor {}: Telegram update with an empty message", self._identifier)
            return
        if msg.chat.kind not in BRIDGED_CHAT_KINDS:
            logger.debug("Processor {}: Telegram message not from a group or supergroup", self._identifier)
            return
        if self._filtered(msg.text):
            logger.debug(
                "Processor {}: Telegram message in chat {} matches content filter",
                self._identifier,
                msg.chat.id,
            )
            return

        logger.debug(
            "Processor {}: Telegram message from chat ID {}, username {}",
            self._identifier,
            msg.chat.id,
            msg.chat.username,
        )
        for link in self._links.find_links(update.source_id):
            if not _chat_matches(msg.chat, link.telegram_group):
                continue
            ircgw = self._get_gateway(link.irc_gateway_id, IRCGateway, "IRC")
            if ircgw is None:
                continue
            lines = telegram_to_irc_lines(display_name(msg.sender), msg.text, self._irc_max_line_bytes)
            logger.debug(
                "Processor {}: sending {} lines to IRC channel {}",
                self._identifier,
                len(lines),
                link.irc_channel,
            )
            for line in lines:
                try:
                    await ircgw.privmsg(link.irc_channel, line)
                except Exception as exc:
                    logger.exception(
                        "Processor {}: an error occurred while forwarding a message from Telegram to IRC: {}",
                        self._identifier,
                        exc,
                    )
