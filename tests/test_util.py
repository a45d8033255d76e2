# tests/test_util.py
import pytest

from lightbars.util import escape_xml, is_sequence, to_text


class TestEscapeXml:
    @pytest.mark.parametrize("raw,expected", [
        ("value < 10", "value &lt; 10"),
        ("value > 10", "value &gt; 10"),
        ("Tom & Jerry", "Tom &amp; Jerry"),
        ("It's working", "It&apos;s working"),
        ('He said "Hello"', "He said &quot;Hello&quot;"),
        ('Error: value < 10 & status = "failed"', "Error: value &lt; 10 &amp; status = &quot;failed&quot;"),
        ("Normal text without special characters", "Normal text without special characters"),
        ("", ""),
        (None, ""),
    ])
    def test_escapes(self, raw, expected):
        assert escape_xml(raw) == expected

    def test_does_not_double_escape_order(self):
        assert escape_xml("&lt;") == "&amp;lt;"


def test_is_sequence():
    assert is_sequence([1])
    assert is_sequence(())
    assert not is_sequence("abc")
    assert not is_sequence(b"abc")
    assert not is_sequence({"a": 1})
    assert not is_sequence(None)


def test_to_text():
    assert to_text(True) == "true"
    assert to_text(False) == "false"
    assert to_text(12) == "12"
    assert to_text("x") == "x"
