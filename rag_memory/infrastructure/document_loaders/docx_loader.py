from pathlib import Path

from docx import Document

from ...core.models.document import ExtractedText


class DocxLoader:

    def supports(self, locator: str) -> bool:
        return Path(locator).suffix.lower() == ".docx"

    def load(self, locator: str) -> ExtractedText:
        doc = Document(locator)
        paragraphs = [p.text.strip() for p in doc.paragraphs if p.text.strip()]
        title = doc.core_properties.title or Path(locator).name
        return ExtractedText(text="\n\n".join(paragraphs), title=title)
