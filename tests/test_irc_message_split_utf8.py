"""Edge-case tests for irc_message_split: UTF-8 boundary handling."""

from __future__ import annotations

from irc2tg.formatting.irc_message_split import split_irc_message


class TestSplitIrcMessageUtf8:
    def test_empty_content_returns_empty_list(self):
        # Arrange / Act
        result = split_irc_message("")

        # Assert
        assert result == []

    def test_short_ascii_is_single_chunk(self):
        # Arrange / Act
        result = split_irc_message("hello", max_bytes=50)

        # Assert
        assert result == ["hello"]

    def test_exact_byte_boundary_is_single_chunk(self):
        # Arrange
        content = "a" * 450

        # Act
        result = split_irc_message(content)

        # Assert
        assert result == [content]

    def test_long_content_splits_at_spaces(self):
        # Arrange
        content = "word " * 200  # 1000 bytes

        # Act
        chunks = split_irc_message(content, max_bytes=100)

        # Assert
        assert len(chunks) > 1
        for chunk in chunks:
            assert len(chunk.encode("utf-8")) <= 100
            assert chunk.endswith(" ")
        assert "".join(chunks) == content

    def test_multi_byte_unicode_not_split_mid_codepoint(self):
        """Emoji (4 bytes each) must never be split across chunks."""
        # Arrange
        content = "\U0001f389" * 120  # 480 bytes total

        # Act
        chunks = split_irc_message(content, max_bytes=22)

        # Assert
        for chunk in chunks:
            assert len(chunk.encode("utf-8")) <= 22
            assert "�" not in chunk
        assert "".join(chunks) == content

    def test_cjk_characters_not_split_mid_codepoint(self):
        """3-byte CJK chars must stay intact across chunk boundaries."""
        # Arrange
        content = "中文测试" * 50  # 600 bytes total

        # Act
        chunks = split_irc_message(content, max_bytes=50)

        # Assert
        assert len(chunks) > 1
        assert "".join(chunks) == content

    def test_character_wider_than_limit_is_emitted_whole(self):
        # Arrange
        content = "\U0001f389\U0001f389"

        # Act
        chunks = split_irc_message(content, max_bytes=2)

        # Assert
        assert chunks == ["\U0001f389", "\U0001f389"]
