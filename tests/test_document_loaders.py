"""Tests for text extraction."""

import pytest
import requests
from docx import Document

from rag_memory.core.exceptions import ExtractionError
from rag_memory.infrastructure.document_loaders import (
    CompositeLoader,
    DocxLoader,
    TextLoader,
    WebLoader,
)
from rag_memory.infrastructure.document_loaders.web_loader import html_to_text


class TestHtmlToText:
    """Visible text extraction from HTML."""

    def test_scripts_styles_and_blank_lines_are_dropped(self):
        html = """
        <html><head><title>  Release   Notes </title>
        <style>body { color: red; }</style></head>
        <body>
          <h1>Version 2</h1>
          <script>var x = "hidden";</script>
          <p>Fixed   the &amp; bug.</p>

          <noscript>enable js</noscript>
        </body></html>
        """

        extracted = html_to_text(html)

        assert extracted.text == "Version 2\nFixed the & bug."
        assert extracted.title == "Release Notes"

    def test_page_without_title(self):
        assert html_to_text("<p>hi</p>").title is None


class TestWebLoader:
    """HTTP fetch with requests."""

    class _Response:
        def __init__(self, text, status=200):
            self.text = text
            self.status_code = status

        def raise_for_status(self):
            if self.status_code >= 400:
                raise requests.HTTPError(f"{self.status_code} error")

    def test_supports_http_only(self):
        loader = WebLoader()

        assert loader.supports("https://example.com")
        assert loader.supports("HTTP://example.com")
        assert not loader.supports("notes.txt")

    def test_load_falls_back_to_url_title(self, monkeypatch):
        monkeypatch.setattr(
            requests, "get", lambda url, timeout: self._Response("<p>body text</p>")
        )

        extracted = WebLoader(timeout=1).load("https://example.com/page")

        assert extracted.text == "body text"
        assert extracted.title == "https://example.com/page"

    def test_http_error_becomes_extraction_error(self, monkeypatch):
        monkeypatch.setattr(
            requests, "get", lambda url, timeout: self._Response("", status=503)
        )

        with pytest.raises(ExtractionError):
            CompositeLoader().load("https://example.com/down")


class TestFileLoaders:
    """Plain text and DOCX files."""

    def test_text_loader(self, tmp_path):
        path = tmp_path / "notes.md"
        path.write_text("# Notes\nremember the milk", encoding="utf-8")

        extracted = TextLoader().load(str(path))

        assert extracted.text == "# Notes\nremember the milk"
        assert extracted.title == "notes.md"

    def test_docx_loader_joins_paragraphs(self, tmp_path):
        path = tmp_path / "letter.docx"
        doc = Document()
        doc.add_paragraph("Dear reader,")
        doc.add_paragraph("   ")
        doc.add_paragraph("Thanks.")
        doc.core_properties.title = "Letter"
        doc.save(str(path))

        extracted = DocxLoader().load(str(path))

        assert extracted.text == "Dear reader,\n\nThanks."
        assert extracted.title == "Letter"


class TestCompositeLoader:
    """Dispatch by locator."""

    def test_dispatches_by_extension(self, tmp_path):
        path = tmp_path / "a.txt"
        path.write_text("alpha", encoding="utf-8")

        assert CompositeLoader().load(str(path)).text == "alpha"

    def test_unsupported_locator_raises_value_error(self):
        loader = CompositeLoader()

        assert not loader.supports("image.png")
        with pytest.raises(ValueError):
            loader.load("image.png")

    def test_missing_file_raises_extraction_error(self, tmp_path):
        with pytest.raises(ExtractionError):
            CompositeLoader().load(str(tmp_path / "missing.txt"))
