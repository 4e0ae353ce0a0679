"""
Unit Tests for the Tokenizer

Covers the escape-aware scanner at segment, element and component level.
"""
import pytest

from edifact_core.config import DelimiterConfig
from edifact_core.errors import EdifactSyntaxError
from edifact_core.tokenizer import (
    escape,
    has_unescaped,
    split_components,
    split_elements,
    split_una,
    tokenize,
    unescape,
)


class TestTokenize:
    """Segment-level scanning."""

    def test_tokenize_when_terminated_then_splits_segments(self, delimiters, invoic_short):
        assert tokenize(invoic_short, delimiters) == [
            "UNH+1+INVOIC:D:93A:UN",
            "BGM+380+INV1",
            "UNT+2+1",
        ]

    def test_tokenize_when_terminator_escaped_then_keeps_escape_sequence(self, delimiters):
        assert tokenize("FTX+AAA+++IT?'S OK'UNT+2+1'", delimiters) == ["FTX+AAA+++IT?'S OK", "UNT+2+1"]

    def test_tokenize_when_line_breaks_between_segments_then_drops_them(self, delimiters):
        assert tokenize("UNH+1'\r\nBGM+2'\n", delimiters) == ["UNH+1", "BGM+2"]

    def test_tokenize_when_last_terminator_missing_then_keeps_last_segment(self, delimiters):
        assert tokenize("UNH+1'BGM+2", delimiters) == ["UNH+1", "BGM+2"]

    def test_tokenize_when_empty_segment_in_middle_then_keeps_it(self, delimiters):
        assert tokenize("UNH+1''BGM+2'", delimiters) == ["UNH+1", "", "BGM+2"]

    @pytest.mark.parametrize("raw", ["", "   ", "\n\r\n"])
    def test_tokenize_when_blank_then_raises_empty_message(self, delimiters, raw):
        with pytest.raises(EdifactSyntaxError, match="empty message"):
            tokenize(raw, delimiters)

    def test_tokenize_when_only_terminators_then_keeps_leading_empties(self, delimiters):
        assert tokenize("''", delimiters) == ["", ""]

    def test_tokenize_when_trailing_lone_escape_then_raises(self, delimiters):
        with pytest.raises(EdifactSyntaxError, match="dangling escape") as excinfo:
            tokenize("UNH+1'BGM+380?", delimiters)
        assert excinfo.value.phase == "tokenize"

    def test_tokenize_when_doubled_escape_at_end_then_not_dangling(self, delimiters):
        assert tokenize("FTX+50??'", delimiters) == ["FTX+50??"]

    def test_tokenize_when_config_missing_then_raises_type_error(self):
        with pytest.raises(TypeError):
            tokenize("UNH+1'", None)

    def test_tokenize_when_custom_delimiters_then_uses_them(self):
        cfg = DelimiterConfig(
            segment_terminator="~",
            element_separator="*",
            component_separator=">",
            escape_char="\\",
        )
        assert tokenize("UNH*1*ORDERS>D>96A>UN~BGM*220*PO\\~1~", cfg) == [
            "UNH*1*ORDERS>D>96A>UN",
            "BGM*220*PO\\~1",
        ]


class TestSplitElements:
    """Element-level scanning."""

    def test_split_when_consecutive_separators_then_preserves_empty_elements(self, delimiters):
        assert split_elements("NAD+BY+++NAME", delimiters) == ("NAD", ["BY", "", "", "NAME"])

    def test_split_when_trailing_separator_then_keeps_trailing_empty(self, delimiters):
        assert split_elements("BGM+380+", delimiters) == ("BGM", ["380", ""])

    def test_split_when_tag_only_then_no_elements(self, delimiters):
        assert split_elements("UNS", delimiters) == ("UNS", [])

    def test_split_when_separator_escaped_then_not_split(self, delimiters):
        assert split_elements("MOA+10?+5", delimiters) == ("MOA", ["10?+5"])


class TestSplitComponents:
    """Component-level scanning and unescaping."""

    def test_split_when_composite_then_unescapes_components(self, delimiters):
        assert split_components("A?:B:C::", delimiters) == ["A:B", "C", "", ""]

    def test_has_unescaped_when_only_escaped_then_false(self, delimiters):
        assert has_unescaped("A?:B", ":", delimiters) is False

    def test_has_unescaped_when_after_doubled_escape_then_true(self, delimiters):
        assert has_unescaped("A??:B", ":", delimiters) is True


class TestEscaping:
    """escape() / unescape()."""

    def test_unescape_when_doubled_escape_then_single_char(self, delimiters):
        assert unescape("50?? OFF", delimiters) == "50? OFF"

    def test_unescape_when_no_escape_then_unchanged(self, delimiters):
        assert unescape("PLAIN TEXT", delimiters) == "PLAIN TEXT"

    def test_escape_when_delimiters_present_then_prefixes_release_char(self, delimiters):
        assert escape("IT'S 10+5:?", delimiters) == "IT?'S 10?+5?:??"

    @pytest.mark.parametrize("value", [
        "IT'S",
        "A+B:C?D'E",
        "???",
        "line1\nline2",
        "",
    ])
    def test_escape_then_tokenize_then_unescape_returns_original(self, delimiters, value):
        raw = f"FTX+{escape(value, delimiters)}'"
        segment = tokenize(raw, delimiters)[0]
        _, elements = split_elements(segment, delimiters)
        assert unescape(elements[0], delimiters) == value


class TestSplitUna:
    """UNA service string advice."""

    def test_split_una_when_absent_then_returns_input(self):
        assert split_una("UNH+1'") == (None, "UNH+1'")

    def test_split_una_when_present_then_returns_config_and_rest(self):
        cfg, rest = split_una("UNA|*.\\ ~UNH*1*ORDERS|D|96A|UN~")
        assert cfg.component_separator == "|"
        assert cfg.element_separator == "*"
        assert cfg.escape_char == "\\"
        assert cfg.segment_terminator == "~"
        assert rest == "UNH*1*ORDERS|D|96A|UN~"

    def test_split_una_when_truncated_then_raises(self):
        with pytest.raises(EdifactSyntaxError, match="truncated UNA"):
            split_una("UNA:+")

    def test_split_una_when_delimiters_clash_then_raises(self):
        with pytest.raises(EdifactSyntaxError, match="invalid UNA"):
            split_una("UNA++.? 'UNH+1'")
