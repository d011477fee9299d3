"""Text sanitization shared by every write path and identity comparison."""
from html.parser import HTMLParser
from typing import Any, List

# contents of these elements are dropped along with the tags
_SKIPPED_TAGS = {"script", "style"}


class _TextExtractor(HTMLParser):
    # character references are passed through still escaped, never decoded,
    # so escaped markup cannot turn into real tags on a later pass
    def __init__(self):
        super().__init__(convert_charrefs=False)
        self._chunks: List[str] = []
        self._skip_depth = 0

    def handle_starttag(self, tag, attrs):
        if tag in _SKIPPED_TAGS:
            self._skip_depth += 1

    def handle_endtag(self, tag):
        if tag in _SKIPPED_TAGS and self._skip_depth:
            self._skip_depth -= 1

    def handle_data(self, data):
        if not self._skip_depth:
            self._chunks.append(data)

    def handle_entityref(self, name):
        self.handle_data(f"&{name};")

    def handle_charref(self, name):
        self.handle_data(f"&#{name};")

    def text(self) -> str:
        return "".join(self._chunks)


def sanitize(value: Any) -> str:
    """Strip HTML markup and surrounding whitespace from ``value``.

    ``None`` becomes an empty string. Entities such as ``&lt;`` are kept as
    written, so ``sanitize(sanitize(x)) == sanitize(x)``: a stored name can
    be sent back as a caller identity and still match itself.
    """
    if value is None:
        return ""
    parser = _TextExtractor()
    parser.feed(str(value))
    parser.close()
    return parser.text().strip()
