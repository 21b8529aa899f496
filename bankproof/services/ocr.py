"""
Optical character recognition using Tesseract.

Images are opened with Pillow. Scanned PDFs are rasterized page by page
with PyMuPDF first, since Tesseract cannot read PDF input directly.
"""
import asyncio
import logging
from io import BytesIO
from typing import List, Optional

import fitz  # PyMuPDF
import pytesseract
from PIL import Image

from bankproof.core.config import settings
from bankproof.core.utils import has_pdf_signature

logger = logging.getLogger(__name__)


def _pdf_pages_to_images(pdf_bytes: bytes, dpi: int, max_pages: int) -> List[Image.Image]:
    """
    Render the first ``max_pages`` pages of a PDF to Pillow images.

    Args:
        pdf_bytes: PDF file content as bytes
        dpi: Resolution for rendering
        max_pages: Upper bound on rendered pages

    Returns:
        One RGB image per rendered page
    """
    images = []
    pdf_document = fitz.open(stream=pdf_bytes, filetype="pdf")
    try:
        # zoom factor: dpi/72 maps PDF points to pixels
        zoom = dpi / 72
        matrix = fitz.Matrix(zoom, zoom)
        for page_number in range(min(len(pdf_document), max_pages)):
            pixmap = pdf_document[page_number].get_pixmap(matrix=matrix)
            images.append(Image.open(BytesIO(pixmap.tobytes("png"))))
    finally:
        pdf_document.close()
    return images


def _recognize(data: bytes, language: str) -> str:
    if has_pdf_signature(data):
        images = _pdf_pages_to_images(data, settings.OCR_RENDER_DPI, settings.OCR_MAX_PDF_PAGES)
    else:
        images = [Image.open(BytesIO(data))]

    text_parts = [pytesseract.image_to_string(image, lang=language) or "" for image in images]
    return "\n".join(text_parts)


async def extract_text_with_ocr(data: bytes, language: Optional[str] = None) -> str:
    """
    Recognize text in an image or scanned PDF.

    Args:
        data: Image or PDF bytes
        language: Tesseract language code (default from settings, "eng")

    Returns:
        Recognized text, or "" on any failure
    """
    lang = language or settings.OCR_DEFAULT_LANGUAGE
    try:
        text = await asyncio.to_thread(_recognize, data, lang)
    except Exception as e:
        logger.warning(f"OCR failed (lang={lang}): {e}")
        return ""

    logger.debug(f"OCR yielded {len(text)} characters (lang={lang})")
    return text
