import logging
import re
from html.parser import HTMLParser

import requests

from ...core.models.document import ExtractedText

logger = logging.getLogger(__name__)


class _VisibleTextParser(HTMLParser):
    """Collect text outside <script>/<style> and the page <title>."""

    SKIP_TAGS = {"script", "style", "noscript", "template"}

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self._skip_depth = 0
        self._in_title = False
        self.parts: list[str] = []
        self.title_parts: list[str] = []

    def handle_starttag(self, tag, attrs):
        if tag in self.SKIP_TAGS:
            self._skip_depth += 1
        elif tag == "title":
            self._in_title = True

    def handle_endtag(self, tag):
        if tag in self.SKIP_TAGS and self._skip_depth:
            self._skip_depth -= 1
        elif tag == "title":
            self._in_title = False

    def handle_data(self, data):
        if self._skip_depth:
            return
        if self._in_title:
            self.title_parts.append(data)
            return
        self.parts.append(data)


def html_to_text(html: str) -> ExtractedText:
    """Strip markup, scripts and styles; entities are unescaped."""
    parser = _VisibleTextParser()
    parser.feed(html)
    parser.close()

    lines = (line.strip() for line in "".join(parser.parts).splitlines())
    text = "\n".join(line for line in lines if line)
    text = re.sub(r"[ \t]{2,}", " ", text)
    title = " ".join("".join(parser.title_parts).split()) or None
    return ExtractedText(text=text, title=title)


class WebLoader:
    """Fetch a web page and return its visible text."""

    def __init__(self, timeout: float = 30.0):
        self._timeout = timeout

    def supports(self, locator: str) -> bool:
        return locator.lower().startswith(("http://", "https://"))

    def load(self, locator: str) -> ExtractedText:
        resp = requests.get(locator, timeout=self._timeout)
        resp.raise_for_status()
        logger.info(f"Fetched {locator} ({len(resp.text)} chars)")
        extracted = html_to_text(resp.text)
        return ExtractedText(text=extracted.text, title=extracted.title or locator)
