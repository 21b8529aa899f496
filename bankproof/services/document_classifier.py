"""
Document type detection from raw bytes.

Decides between the native PDF text-layer path and the OCR path.
"""
from enum import Enum

from bankproof.core.utils import has_pdf_signature


class DocumentKind(Enum):
    """Extraction path for an uploaded document."""
    PDF = "pdf"
    OTHER = "other"

    def __str__(self) -> str:
        return self.value


def classify_document(data: bytes) -> DocumentKind:
    """Classify by the ``%PDF-`` signature; short or unknown buffers are OTHER."""
    return DocumentKind.PDF if has_pdf_signature(data) else DocumentKind.OTHER
