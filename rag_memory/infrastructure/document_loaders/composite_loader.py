import logging

from ...core.exceptions import ExtractionError
from ...core.models.document import ExtractedText
from .docx_loader import DocxLoader
from .pdf_loader import PDFLoader
from .text_loader import TextLoader
from .web_loader import WebLoader

logger = logging.getLogger(__name__)


class CompositeLoader:

    def __init__(self, web_timeout: float = 30.0):
        self._loaders = [
            WebLoader(timeout=web_timeout),
            PDFLoader(),
            DocxLoader(),
            TextLoader(),
        ]

    def supports(self, locator: str) -> bool:
        return any(loader.supports(locator) for loader in self._loaders)

    def load(self, locator: str) -> ExtractedText:
        for loader in self._loaders:
            if loader.supports(locator):
                try:
                    return loader.load(locator)
                except Exception as e:
                    logger.error(f"Failed to load {locator}: {e}")
                    raise ExtractionError(f"Failed to load {locator}: {e}") from e
        raise ValueError(f"Unsupported source: {locator}")
