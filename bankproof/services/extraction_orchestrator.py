"""
Text acquisition for uploaded proof documents.

Routes a document to the PDF text layer or to OCR and never fails: any
extractor error degrades to empty text, which the caller reports as
missing data.
"""
import logging
from typing import Awaitable, Callable, Optional

from bankproof.core.config import settings
from bankproof.core.logging import log_event, resolve_logger
from bankproof.services.document_classifier import DocumentKind, classify_document
from bankproof.services.ocr import extract_text_with_ocr
from bankproof.services.pdf_text import extract_text_from_pdf

logger = logging.getLogger(__name__)

PdfExtractor = Callable[[bytes], Awaitable[str]]
OcrExtractor = Callable[[bytes, str], Awaitable[str]]


class ExtractionOrchestrator:
    """Sequences PDF text-layer extraction with OCR fallback.

    A PDF whose text layer is empty (a scan wrapped in a PDF) gets a second
    chance through OCR, same as an image upload.
    """

    def __init__(
        self,
        pdf_extractor: Optional[PdfExtractor] = None,
        ocr_extractor: Optional[OcrExtractor] = None
    ):
        """
        Args:
            pdf_extractor: Async ``(bytes) -> text`` (default: pypdf text layer)
            ocr_extractor: Async ``(bytes, language) -> text`` (default: Tesseract)
        """
        self.pdf_extractor = pdf_extractor or extract_text_from_pdf
        self.ocr_extractor = ocr_extractor or extract_text_with_ocr

    async def extract_text(
        self,
        data: bytes,
        language: Optional[str] = None,
        request_logger: Optional[logging.Logger] = None
    ) -> str:
        """
        Acquire plain text from a document.

        Args:
            data: Raw document bytes
            language: OCR language hint (default from settings, "eng")
            request_logger: Caller's logger for decision-point events

        Returns:
            Extracted text, "" when every path failed
        """
        events = resolve_logger(request_logger)
        kind = classify_document(data)

        if kind is DocumentKind.PDF:
            text = await self._run_pdf(data, events)
            if text.strip():
                log_event(events, logging.DEBUG, "text_extraction_path", path="pdf", chars=len(text))
                return text
            log_event(events, logging.DEBUG, "text_extraction_path", path="ocr", reason="empty_text_layer")
        else:
            log_event(events, logging.DEBUG, "text_extraction_path", path="ocr", reason="not_pdf")

        return await self._run_ocr(data, language or settings.OCR_DEFAULT_LANGUAGE, events)

    async def _run_pdf(self, data: bytes, events: logging.Logger) -> str:
        try:
            return await self.pdf_extractor(data) or ""
        except Exception as e:
            logger.warning(f"PDF extractor raised, treating as empty text: {e}")
            log_event(events, logging.WARNING, "text_extraction_failed", extractor="pdf", error=str(e))
            return ""

    async def _run_ocr(self, data: bytes, language: str, events: logging.Logger) -> str:
        try:
            return await self.ocr_extractor(data, language) or ""
        except Exception as e:
            logger.warning(f"OCR extractor raised, treating as empty text: {e}")
            log_event(events, logging.WARNING, "text_extraction_failed", extractor="ocr", error=str(e))
            return ""


# Singleton orchestrator instance
_orchestrator: Optional[ExtractionOrchestrator] = None


def get_extraction_orchestrator() -> ExtractionOrchestrator:
    """Get singleton extraction orchestrator with the default extractors."""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = ExtractionOrchestrator()
    return _orchestrator
