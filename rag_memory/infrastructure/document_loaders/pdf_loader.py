from pathlib import Path

from pypdf import PdfReader

from ...core.models.document import ExtractedText


class PDFLoader:

    def supports(self, locator: str) -> bool:
        return Path(locator).suffix.lower() == ".pdf"

    def load(self, locator: str) -> ExtractedText:
        reader = PdfReader(locator)
        text_parts = []
        for page in reader.pages:
            text = page.extract_text()
            if text and text.strip():
                text_parts.append(text)

        title = None
        if reader.metadata is not None and reader.metadata.title:
            title = str(reader.metadata.title)
        return ExtractedText(text="\n".join(text_parts), title=title or Path(locator).name)
