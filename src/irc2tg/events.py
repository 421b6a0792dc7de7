"""Inbound event types delivered by the host to a processor."""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from typing import Any

from irc2tg.core.constants import CORE_UPDATE, PERIPHERALS_LOADED, PRIVMSG


@dataclass
class CoreEvent:
    """Lifecycle signal from the host."""

    source_id: str
    kind: str
    status: str

    @property
    def peripherals_loaded(self) -> bool:
        """True for the "all endpoints loaded" signal."""
        return self.kind == CORE_UPDATE and self.status == PERIPHERALS_LOADED


@dataclass
class IRCMessage:
    """Decoded IRC line. For PRIVMSG, parameters are [target, text]."""

    source_id: str  # IRC gateway id
    command: str
    channel: str
    sender: str  # nick of the origin
    parameters: list[str] = field(default_factory=list)

    @property
    def text(self) -> str | None:
        """Message text of a PRIVMSG, or None when the line carries none."""
        if len(self.parameters) < 2:
            return None
        return self.parameters[1]


@dataclass
class TelegramUser:
    """Sender of a Telegram message."""

    username: str = ""
    first_name: str = ""
    last_name: str = ""


@dataclass
class TelegramChat:
    """Chat a Telegram message was posted in."""

    id: int
    kind: str  # "private" | "group" | "supergroup" | "channel"
    username: str | None = None


@dataclass
class TelegramMessage:
    """Message carried by a Telegram update. sender is None for anonymous posts."""

    chat: TelegramChat
    text: str = ""
    sender: TelegramUser | None = None


@dataclass
class TelegramUpdate:
    """Telegram update. message is None for updates that carry no message."""

    source_id: str  # Telegram gateway id
    message: TelegramMessage | None = None
    update_id: int | None = None


@dataclass
class UnknownEvent:
    """Any event kind the processor does not route."""

    source_id: str
    kind: str
    payload: dict[str, Any] = field(default_factory=dict)


InboundEvent = CoreEvent | IRCMessage | TelegramUpdate | UnknownEvent


def event(type_name: str):
    """Decorator to mark a factory as producing an event with a given type."""

    def decorator(f: Any) -> Any:
        @functools.wraps(f)
        def wrapper(*args: Any, **kwargs: Any) -> tuple[str, object]:
            evt = f(*args, **kwargs)
            return (type_name, evt)

        wrapper.TYPE = type_name  # type: ignore[attr-defined]
        return wrapper

    return decorator


@event("core")
def core_event(source_id: str, kind: str, status: str) -> CoreEvent:
    return CoreEvent(source_id=source_id, kind=kind, status=status)


@event("core")
def peripherals_loaded(source_id: str = "core") -> CoreEvent:
    return CoreEvent(source_id=source_id, kind=CORE_UPDATE, status=PERIPHERALS_LOADED)


@event("irc_message")
def irc_message(
    source_id: str,
    channel: str,
    sender: str,
    text: str,
    *,
    command: str = PRIVMSG,
    parameters: list[str] | None = None,
) -> IRCMessage:
    return IRCMessage(
        source_id=source_id,
        command=command,
        channel=channel,
        sender=sender,
        parameters=parameters if parameters is not None else [channel, text],
    )


@event("telegram_update")
def telegram_update(
    source_id: str,
    chat_id: int,
    text: str,
    *,
    chat_kind: str = "supergroup",
    chat_username: str | None = None,
    username: str = "",
    first_name: str = "",
    last_name: str = "",
    anonymous: bool = False,
    update_id: int | None = None,
) -> TelegramUpdate:
    sender = None if anonymous else TelegramUser(username, first_name, last_name)
    return TelegramUpdate(
        source_id=source_id,
        message=TelegramMessage(
            chat=TelegramChat(id=chat_id, kind=chat_kind, username=chat_username),
            text=text,
            sender=sender,
        ),
        update_id=update_id,
    )


@event("unknown")
def unknown_event(source_id: str, kind: str, *, payload: dict[str, Any] | None = None) -> UnknownEvent:
    return UnknownEvent(source_id=source_id, kind=kind, payload=payload or {})
