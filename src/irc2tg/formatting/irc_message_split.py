"""Split long messages for IRC (512 byte limit) at word boundaries."""

from __future__ import annotations

from irc2tg.core.constants import IRC_MAX_LINE_BYTES


def _valid_prefix(chunk: bytes) -> bytes:
    """Trim trailing bytes until chunk decodes as UTF-8."""
    while chunk:
        try:
            chunk.decode("utf-8", errors="strict")
            return chunk
        except UnicodeDecodeError:
            chunk = chunk[:-1]
    return chunk


def split_irc_message(content: str, max_bytes: int = IRC_MAX_LINE_BYTES) -> list[str]:
    """Split content into chunks at word boundaries, each <= max_bytes.

    IRC messages are limited to 512 bytes total (prefix + PRIVMSG + target + content + CRLF);
    the default leaves room for "PRIVMSG #channel :" and the server-added prefix.
    Never splits in the middle of a UTF-8 multi-byte character.
    """
    if not content:
        return []
    encoded = content.encode("utf-8", errors="replace")
    if len(encoded) <= max_bytes:
        return [content]

    chunks: list[str] = []
    start = 0
    while start < len(encoded):
        end = min(start + max_bytes, len(encoded))
        chunk_bytes = _valid_prefix(encoded[start:end])
        if not chunk_bytes:
            # A single character wider than max_bytes; emit it whole
            width = 1
            while not _valid_prefix(encoded[start : start + width]):
                width += 1
            chunk_bytes = encoded[start : start + width]
        end = start + len(chunk_bytes)
        # Try to break at a space in the second half of the chunk
        if end < len(encoded):
            last_space = chunk_bytes.rfind(b" ")
            if last_space > max_bytes // 2:
                chunk_bytes = encoded[start : start + last_space + 1]
                end = start + len(chunk_bytes)
        chunks.append(chunk_bytes.decode("utf-8", errors="replace"))
        start = end
    return chunks
