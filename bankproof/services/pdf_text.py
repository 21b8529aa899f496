"""
PDF text-layer extraction using pypdf.

Reads the embedded text of digitally generated PDFs. Scanned PDFs have
no text layer and come back empty, which sends them to OCR.
"""
import asyncio
import logging
from io import BytesIO

from pypdf import PdfReader

logger = logging.getLogger(__name__)


def _read_text_layer(pdf_bytes: bytes) -> str:
    reader = PdfReader(BytesIO(pdf_bytes))
    pages = [page.extract_text() or "" for page in reader.pages]
    return "\n".join(pages)


async def extract_text_from_pdf(pdf_bytes: bytes) -> str:
    """
    Extract the text layer of a PDF.

    Args:
        pdf_bytes: PDF file content as bytes

    Returns:
        Extracted text, or "" if the PDF cannot be parsed
    """
    try:
        text = await asyncio.to_thread(_read_text_layer, pdf_bytes)
    except Exception as e:
        logger.warning(f"PDF text-layer extraction failed: {e}")
        return ""

    logger.debug(f"PDF text layer yielded {len(text)} characters")
    return text
