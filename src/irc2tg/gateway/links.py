"""Link table: static IRC channel <-> Telegram group pairings."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, fields
from typing import Any

from loguru import logger

from irc2tg.core.errors import LinkConfigurationError


@dataclass(frozen=True)
class Link:
    """One pairing of an IRC channel with a Telegram group.

    ``telegram_group`` is either a numeric chat id ("-1001140292730") or an
    "@username" alias.
    """

    irc_gateway_id: str
    irc_channel: str
    telegram_gateway_id: str
    telegram_group: str

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, str):
                raise LinkConfigurationError(
                    f"link field {f.name} must be a string",
                    code="invalid_link_field",
                    details={"field": f.name, "type": type(value).__name__},
                )
            if not value:
                raise LinkConfigurationError(
                    f"link field {f.name} cannot have zero length",
                    code="empty_link_field",
                    details={"field": f.name},
                )

    def references(self, endpoint_id: str) -> bool:
        """True if either side of the link is the given endpoint."""
        return endpoint_id in (self.irc_gateway_id, self.telegram_gateway_id)


_LINK_KEYS = tuple(f.name for f in fields(Link))


class LinkTable:
    """Ordered, immutable sequence of links. Order is configuration order."""

    def __init__(self, links: Iterable[Link] = ()) -> None:
        table: list[Link] = []
        for i, link in enumerate(links):
            if not isinstance(link, Link):
                raise LinkConfigurationError(
                    f"links[{i}] is not a Link",
                    code="invalid_link",
                    details={"index": i, "type": type(link).__name__},
                )
            # Link validates on construction; re-check in case it was built around __init__
            link.__post_init__()
            table.append(link)
        self._links: tuple[Link, ...] = tuple(table)

    @classmethod
    def from_records(cls, records: Iterable[Any]) -> LinkTable:
        """Build a table from raw config records (dicts with the four link keys)."""
        links: list[Link] = []
        for i, item in enumerate(records):
            if not isinstance(item, dict):
                raise LinkConfigurationError(
                    f"links[{i}] must be a dict",
                    code="invalid_link_item",
                    details={"index": i},
                )
            missing = [k for k in _LINK_KEYS if k not in item]
            if missing:
                raise LinkConfigurationError(
                    f"links[{i}] missing {', '.join(missing)}",
                    code="missing_link_field",
                    details={"index": i, "missing": missing},
                )
            try:
                links.append(Link(**{k: item[k] for k in _LINK_KEYS}))
            except LinkConfigurationError as exc:
                raise exc.at_index(i)
        table = cls(links)
        logger.info("Links: loaded {} links", len(table))
        return table

    def find_links(self, endpoint_id: str) -> list[Link]:
        """Return every link referencing endpoint_id on either side, in table order."""
        return [link for link in self._links if link.references(endpoint_id)]

    def irc_channels(self) -> list[tuple[str, str]]:
        """Distinct (irc_gateway_id, irc_channel) pairs, in table order."""
        seen: dict[tuple[str, str], None] = {}
        for link in self._links:
            seen.setdefault((link.irc_gateway_id, link.irc_channel), None)
        return list(seen)

    def __iter__(self) -> Iterator[Link]:
        return iter(self._links)

    def __len__(self) -> int:
        return len(self._links)

    def __repr__(self) -> str:
        return f"LinkTable({list(self._links)!r})"
