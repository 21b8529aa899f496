"""
Configuration settings for the application.
"""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Logging Configuration
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"  # Options: "text", "json"
    LOG_INCLUDE_REQUEST_ID: bool = True  # Include X-Request-ID in logs

    # Verification Configuration
    VERIFICATION_TIMEOUT_MS: int = 5000  # Default budget for one verification call (milliseconds)
    HTTP_MAX_KEEPALIVE_CONNECTIONS: int = 10  # Maximum number of keepalive connections
    HTTP_MAX_CONNECTIONS: int = 20  # Maximum total connections

    # Banco BAI verification authority
    BAI_ENDPOINT: str = "https://validador.bancobai.ao/api/validate"

    # OCR Configuration
    OCR_DEFAULT_LANGUAGE: str = "eng"  # Tesseract language code
    OCR_RENDER_DPI: int = 300  # Resolution used to rasterize scanned PDF pages
    OCR_MAX_PDF_PAGES: int = 5  # Proofs of payment are short; cap OCR work per document

    # HTTP front end
    MAX_UPLOAD_MB: int = 5  # Max upload size for proof documents
    DEFAULT_PROVIDER: str = "BAI"  # Provider used when the request names none

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
