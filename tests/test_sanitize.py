import pytest

from batepapo.core.sanitize import sanitize


class TestSanitize:
    """Test the shared text sanitizer"""

    def test_strips_tags_and_whitespace(self):
        assert sanitize("  <b>João</b>  ") == "João"

    def test_drops_script_contents(self):
        assert sanitize("oi<script>alert('x')</script> tudo bem") == "oi tudo bem"

    def test_keeps_character_references_escaped(self):
        assert sanitize("Tom &amp; Jerry") == "Tom &amp; Jerry"
        assert sanitize("&lt;script&gt;alert(1)&lt;/script&gt;") == "&lt;script&gt;alert(1)&lt;/script&gt;"
        assert sanitize("caf&#233;") == "caf&#233;"

    def test_none_becomes_empty(self):
        assert sanitize(None) == ""

    def test_markup_only_becomes_empty(self):
        assert sanitize("<p> </p>") == ""

    def test_plain_text_untouched(self):
        assert sanitize("bom dia") == "bom dia"
        assert sanitize("a & b < c") == "a & b < c"

    @pytest.mark.parametrize("raw", [
        "&lt;script&gt;alert(1)&lt;/script&gt;",
        "&lt;b&gt;Ana&lt;/b&gt;",
        " <i>Ana</i> &amp;amp; ",
        "<b>&lt;i&gt;</b>x",
        "Tom &amp; Jerry",
        "plain",
    ])
    def test_is_idempotent(self, raw):
        once = sanitize(raw)
        assert sanitize(once) == once
        assert "<" not in once
