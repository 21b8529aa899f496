from typing import Union

from bankproof.core.constants import PDF_SIGNATURE

BytesLike = Union[bytes, bytearray, memoryview]


def to_bytes(data: BytesLike) -> bytes:
    """
    Coerce an uploaded buffer to immutable bytes.

    Raises:
        TypeError: If data is not a bytes-like buffer
    """
    if isinstance(data, bytes):
        return data
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"Expected bytes, bytearray or memoryview, got {type(data).__name__}")


def has_pdf_signature(data: bytes) -> bool:
    """Check the fixed ``%PDF-`` header in the first five bytes."""
    return data[:len(PDF_SIGNATURE)] == PDF_SIGNATURE
