from bankproof.services.code_extractor import extract_codes
from bankproof.services.document_classifier import DocumentKind, classify_document
from bankproof.services.extraction_orchestrator import ExtractionOrchestrator, get_extraction_orchestrator
from bankproof.services.text_normalizer import normalize_text
from bankproof.services.validation_service import extract_and_validate, validate_codes

__all__ = [
    "DocumentKind",
    "ExtractionOrchestrator",
    "classify_document",
    "extract_and_validate",
    "extract_codes",
    "get_extraction_orchestrator",
    "normalize_text",
    "validate_codes",
]
