from pathlib import Path

from ...core.models.document import ExtractedText


class TextLoader:

    EXTENSIONS = {".txt", ".md", ".markdown"}

    def supports(self, locator: str) -> bool:
        return Path(locator).suffix.lower() in self.EXTENSIONS

    def load(self, locator: str) -> ExtractedText:
        path = Path(locator)
        return ExtractedText(text=path.read_text(encoding="utf-8"), title=path.name)
