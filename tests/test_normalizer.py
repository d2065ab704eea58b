"""Tests for the normalization pipeline and the hidden-character check."""

import pytest

from inputguard.scanner.normalizer import (
    close_tag_gaps,
    collapse_whitespace,
    contains_hidden_chars,
    decode_html_entities,
    decode_js_escapes,
    normalize,
    percent_decode,
    remove_invisible_characters,
    remove_null_bytes,
)


class TestStages:
    def test_trim(self):
        assert normalize("   hello  ") == "hello"

    def test_invisible_characters_removed(self):
        assert remove_invisible_characters("sc\u200bri\u00adpt\ufeff") == "script"
        assert remove_invisible_characters("a\u2060b\u202ec") == "abc"

    def test_percent_decode(self):
        assert percent_decode("%3Cscript%3E") == "<script>"
        assert percent_decode("a+b") == "a b"

    def test_percent_decode_malformed_keeps_rest(self):
        assert percent_decode("100%") == "100%"
        assert percent_decode("%zz%3C+") == "%zz<+"

    def test_percent_decode_invalid_utf8_falls_back_pairwise(self):
        assert percent_decode("..%c0%af") == "..\u00c0\u00af"

    def test_numeric_entities(self):
        assert decode_html_entities("&#60;script&#62;") == "<script>"
        assert decode_html_entities("&#x3C;b&#x3e;") == "<b>"
        assert decode_html_entities("&#60b") == "<b"

    def test_named_entities_case_insensitive(self):
        assert decode_html_entities("&LT;b&gt; &amp; &quot;x&quot; &apos;") == "<b> & \"x\" '"

    def test_out_of_range_entity_dropped(self):
        assert decode_html_entities("a&#99999999999;b") == "ab"

    def test_js_escapes(self):
        assert decode_js_escapes("\\u0061lert") == "alert"
        assert decode_js_escapes("\\u{61}\\u{1F600}") == "a\U0001F600"
        assert decode_js_escapes("\\x3cb\\x3e") == "<b>"

    def test_surrogate_entities_dropped(self):
        assert decode_html_entities("a&#55296;b&#xD800;c") == "abc"

    def test_surrogate_pair_escape_joined(self):
        assert decode_js_escapes("\\uD83D\\uDE00") == "\U0001F600"

    def test_unpaired_surrogate_escape_dropped(self):
        assert decode_js_escapes("\\uD800x\\uDC00") == "x"

    def test_out_of_range_braced_escape_kept(self):
        assert decode_js_escapes("\\u{FFFFFFFF}") == "\\u{FFFFFFFF}"

    def test_null_bytes(self):
        assert remove_null_bytes("a\x00b%00c\\0d&#0;e") == "abcde"

    def test_tag_gap_closed(self):
        assert close_tag_gaps("<   script>") == "<script>"
        assert close_tag_gaps("< /p>") == "</p>"
        assert close_tag_gaps("< >") == "< >"

    def test_control_characters_in_tag_gap(self):
        assert close_tag_gaps("<\x01\x02script>") == "<script>"
        assert normalize("<\x01\x02script>") == "<script>"

    def test_whitespace_runs_collapsed(self):
        assert collapse_whitespace("a \t\n b") == "a b"
        assert collapse_whitespace("a b") == "a b"


class TestPipeline:
    def test_percent_encoded_script(self):
        assert normalize("%3Cscript%3Ealert(1)%3C/script%3E") == "<script>alert(1)</script>"

    def test_entity_encoded_script(self):
        assert normalize("&#x3C;script&#x3E;alert(1)&#x3C;/script&#x3E;") == (
            "<script>alert(1)</script>"
        )

    def test_zero_width_split_script(self):
        assert normalize("<sc\u200bript>x</sc\u200bript>") == "<script>x</script>"

    def test_exploded_tag(self):
        assert normalize("< s c r i p t >") == "<s c r i p t >"

    def test_js_escape_in_protocol(self):
        assert normalize("jaVascr\\u0069pt:alert(1)") == "jaVascript:alert(1)"

    def test_percent_encoded_null(self):
        assert normalize("file.txt%00.png") == "file.txt.png"

    def test_entity_split_script(self):
        assert normalize("<scr&#8203;ipt>x</scr&#8203;ipt>") == "<script>x</script>"

    def test_escape_split_script(self):
        assert normalize("<scr\\u200Bipt>") == "<script>"

    def test_no_surrogates_survive(self):
        assert normalize("<script>&#55296;\\uDFFF</script>") == "<script></script>"

    def test_empty(self):
        assert normalize("") == ""

    @pytest.mark.parametrize(
        "raw",
        [
            "Hello world",
            "%3Cscript%3Ealert(1)%3C/script%3E",
            "<sc\u200bript>x</sc\u200bript>",
            "admin' OR '1'='1' --",
            "  spaced   out  ",
            "&lt;img src=x onerror=alert(1)&gt;",
            "<scr&#8203;ipt>alert(1)</scr&#8203;ipt>",
            "<scr\\u200Bipt>alert(1)</scr\\u200Bipt>",
            "<\x01\x02script>",
            "<script>&#55296;</script>",
        ],
    )
    def test_idempotent_on_normalized_output(self, raw):
        once = normalize(raw)
        assert normalize(once) == once


class TestHiddenChars:
    def test_zero_width_detected(self):
        assert contains_hidden_chars("sc\u200bript", "script") is True

    def test_soft_hyphen_detected(self):
        assert contains_hidden_chars("sc\u00adript", "script") is True

    def test_other_invisible_not_a_marker(self):
        # U+2000 is stripped by normalization but is not an obfuscation marker
        assert contains_hidden_chars("a\u2000b", "ab") is False

    def test_entity_spelled_marker_detected(self):
        assert contains_hidden_chars("<scr&#8203;ipt>", "<script>") is True

    def test_escape_spelled_marker_detected(self):
        assert contains_hidden_chars("<scr\\u200bipt>", "<script>") is True

    def test_plain_entities_not_a_marker(self):
        assert contains_hidden_chars("&lt;b&gt;", "<b>") is False

    def test_markers_only_not_reported(self):
        assert contains_hidden_chars("\u200b\u200b", "") is False

    def test_unchanged_value(self):
        assert contains_hidden_chars("abc", "abc") is False

    def test_empty(self):
        assert contains_hidden_chars("", "") is False
