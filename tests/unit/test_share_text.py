"""Unit tests for share preview text helpers."""

import pytest

from app.services.share_preview.errors import MalformedTimestampError
from app.services.share_preview.text import (
    build_description,
    escape_html,
    format_published_time,
    strip_to_one_line,
)


class TestEscapeHtml:
    """Tests for escape_html()."""

    def test_escapes_all_five_characters(self):
        assert escape_html("""<a href="x">Tom & Jerry's</a>""") == (
            "&lt;a href=&quot;x&quot;&gt;Tom &amp; Jerry&#39;s&lt;/a&gt;"
        )

    def test_ampersand_is_escaped_first(self):
        """Existing entities are escaped again rather than passed through."""
        assert escape_html("&lt;") == "&amp;lt;"

    def test_none_becomes_empty(self):
        assert escape_html(None) == ""

    def test_non_strings_are_stringified(self):
        assert escape_html(1200) == "1200"


class TestStripToOneLine:
    """Tests for strip_to_one_line()."""

    def test_replaces_tags_with_spaces(self):
        assert strip_to_one_line("<p>Hola</p><p>mundo</p>") == "Hola mundo"

    def test_collapses_whitespace(self):
        assert strip_to_one_line("  uno\n\n dos\t tres  ") == "uno dos tres"

    def test_empty_values(self):
        assert strip_to_one_line(None) == ""
        assert strip_to_one_line("") == ""


class TestBuildDescription:
    """Tests for build_description()."""

    def test_short_body_is_kept_whole(self):
        body = "<p>Gran   jornada</p>\n<p>en el club.</p>"
        assert build_description(body, 180) == "Gran jornada en el club."

    def test_long_body_is_truncated(self):
        body = "palabra " * 100
        description = build_description(body, 180)

        assert len(description) <= 180
        assert body.startswith(description)

    def test_cut_may_fall_mid_word(self):
        assert build_description("abcdefghij", 4) == "abcd"

    def test_exact_length_body_is_untouched(self):
        body = "x" * 180
        assert build_description(body, 180) == body

    def test_fallback_used_for_empty_body(self):
        assert build_description("<br/>", 180, fallback="Sin descripción") == (
            "Sin descripción"
        )


class TestFormatPublishedTime:
    """Tests for format_published_time()."""

    def test_supabase_timestamp_with_offset(self):
        assert format_published_time("2024-05-01T12:30:00.123456+00:00") == (
            "2024-05-01T12:30:00.123Z"
        )

    def test_normalizes_to_utc(self):
        assert format_published_time("2024-05-01T09:30:00-03:00") == (
            "2024-05-01T12:30:00.000Z"
        )

    def test_zulu_suffix(self):
        assert format_published_time("2024-02-10T09:00:00Z") == (
            "2024-02-10T09:00:00.000Z"
        )

    def test_naive_timestamp_is_utc(self):
        assert format_published_time("2024-02-10 09:00:00") == (
            "2024-02-10T09:00:00.000Z"
        )

    @pytest.mark.parametrize("raw", ["ayer", "2024-13-45", ""])
    def test_unparseable_raises(self, raw):
        with pytest.raises(MalformedTimestampError):
            format_published_time(raw)
