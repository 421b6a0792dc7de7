"""Property-based tests using hypothesis."""

from __future__ import annotations

import asyncio

from hypothesis import given, settings
from hypothesis import strategies as st

from irc2tg.formatting import is_whitespace, telegram_to_irc_lines
from tests.harness import CHANNEL, GROUP, ProcessorTestHarness

_names = st.text(alphabet=st.characters(blacklist_categories=("Cs",)), max_size=20)
_texts = st.text(alphabet=st.characters(blacklist_categories=("Cs",)), max_size=200)


class TestPropertyBased:
    @settings(max_examples=50)
    @given(
        kind=st.text(max_size=12).filter(lambda k: k not in ("group", "supergroup")),
        text=_texts,
        username=_names,
        chat_id=st.integers(min_value=-(2**52), max_value=2**52),
    )
    def test_non_group_chats_never_reach_irc(self, kind, text, username, chat_id):
        """Property: only group and supergroup chats produce IRC sends."""
        # Arrange
        h = ProcessorTestHarness()

        async def scenario() -> None:
            await h.activate()
            await h.telegram_says(text, chat_id=chat_id, chat_kind=kind, username=username)

        # Act
        asyncio.run(scenario())

        # Assert
        assert h.irc.sent == []

    @settings(max_examples=50)
    @given(text=_texts, sender=_names)
    def test_nothing_forwarded_before_activation(self, text, sender):
        """Property: a processor that never became ready sends nothing, whatever arrives."""
        # Arrange
        h = ProcessorTestHarness()

        async def scenario() -> None:
            await h.irc_says(text or "x", sender=sender or "alice")
            await h.telegram_says(text or "x", chat_id=int(GROUP), username=sender or "bob")

        # Act
        asyncio.run(scenario())

        # Assert
        assert h.irc.sent == []
        assert h.telegram.sent == []
        assert h.irc.joined == []

    @given(st.lists(st.sampled_from(["", " ", "\t", "  \t ", "a", "b c", "été"]), max_size=10))
    def test_blank_lines_never_sent(self, lines):
        """Property: one IRC line per non-blank input line, in order, and never a blank one."""
        # Arrange
        text = "\n".join(lines)

        # Act
        sent = telegram_to_irc_lines("bob", text)

        # Assert
        expected = [f"(tg) bob : {line}" for line in lines if not is_whitespace(line)]
        assert sent == expected

    @settings(max_examples=50)
    @given(text=_texts.filter(lambda t: t.strip() != ""))
    def test_irc_lines_stay_within_byte_limit(self, text):
        """Property: every line sent to IRC fits the configured byte budget."""
        # Arrange
        h = ProcessorTestHarness(irc_max_line_bytes=80)

        async def scenario() -> None:
            await h.activate()
            h.clear()
            await h.telegram_says(text)

        # Act
        asyncio.run(scenario())

        # Assert
        for channel, line in h.irc.sent:
            assert channel == CHANNEL
            assert len(line.encode("utf-8")) <= 80

    @settings(max_examples=100)
    @given(
        sender=st.text(alphabet=st.characters(blacklist_categories=("Cs",)), max_size=200),
        text=_texts.filter(lambda t: t.strip() != ""),
        max_bytes=st.integers(min_value=64, max_value=512),
    )
    def test_lines_fit_budget_whatever_the_sender(self, sender, text, max_bytes):
        """Property: a long sender name never pushes a line over the budget."""
        # Act
        lines = telegram_to_irc_lines(sender, text, max_bytes)

        # Assert
        for line in lines:
            assert line.startswith("(tg) ")
            assert len(line.encode("utf-8")) <= max_bytes
