"""
API tests for the validation and health endpoints.

Uses FastAPI's TestClient with a stub provider registry and stubbed
text extraction.
"""
import re
import unittest
from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

import bankproof.providers.registry as registry_module
from bankproof.models.verification_models import PatternSet, VerificationStatus
from bankproof.providers.base import BaseVerificationProvider
from bankproof.providers.registry import ProviderRegistry
from bankproof.services.extraction_orchestrator import ExtractionOrchestrator
from main import app

RECEIPT_TEXT = "CHAVE: 414979709 PIN: 86612413"


class StubProvider(BaseVerificationProvider):
    """Confirms 414979709/86612413, rejects anything else."""

    def __init__(self):
        super().__init__(
            "STUB",
            PatternSet(key=re.compile(r"\b\d{9}\b"), pin=re.compile(r"\b\d{8}\b")),
        )

    async def verify(self, key, pin, context=None):
        if key == "414979709" and pin == "86612413":
            return self.outcome(VerificationStatus.CONFIRMED, raw={"error": False})
        return self.outcome(VerificationStatus.INVALID, "UNCONFIRMED_RESPONSE")


class ApiTestCase(unittest.TestCase):
    """Shared fixture: stub registry and stub extractors."""

    def setUp(self):
        """Install the stub registry and orchestrator."""
        registry_module._registry = ProviderRegistry([StubProvider()])
        self.ocr_extractor = AsyncMock(return_value=RECEIPT_TEXT)
        orchestrator = ExtractionOrchestrator(
            pdf_extractor=AsyncMock(return_value=""),
            ocr_extractor=self.ocr_extractor,
        )
        patcher = patch(
            "bankproof.services.validation_service.get_extraction_orchestrator",
            return_value=orchestrator,
        )
        patcher.start()
        self.addCleanup(patcher.stop)
        self.client = TestClient(app)

    def tearDown(self):
        """Clear the global registry."""
        registry_module._registry = None


class TestValidateEndpoint(ApiTestCase):
    """Test cases for POST /api/validate."""

    def test_confirmed(self):
        """Test a valid pair is confirmed."""
        response = self.client.post(
            "/api/validate?provider=STUB",
            json={"key": "414979709", "pin": "86612413"},
        )

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["status"], "CONFIRMED")
        self.assertEqual(body["provider"], "STUB")
        self.assertIn("X-Request-ID", response.headers)

    def test_chave_alias(self):
        """Test the source field name "chave" is accepted for the key."""
        response = self.client.post(
            "/api/validate?provider=stub",
            json={"chave": "414979709", "pin": "86612413"},
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "CONFIRMED")

    def test_empty_codes_are_missing_data(self):
        """Test empty strings produce MISSING_DATA, not an HTTP error."""
        response = self.client.post(
            "/api/validate?provider=STUB",
            json={"key": "", "pin": ""},
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["message"], "MISSING_DATA")

    def test_missing_field_rejected(self):
        """Test a body without pin fails request validation."""
        response = self.client.post("/api/validate?provider=STUB", json={"key": "414979709"})

        self.assertEqual(response.status_code, 422)

    def test_unknown_provider(self):
        """Test an unregistered provider name returns 404."""
        response = self.client.post(
            "/api/validate?provider=NOPE",
            json={"key": "414979709", "pin": "86612413"},
        )

        self.assertEqual(response.status_code, 404)
        self.assertIn("NOPE", response.json()["detail"])

    def test_request_id_propagated(self):
        """Test an incoming X-Request-ID is echoed back."""
        response = self.client.post(
            "/api/validate?provider=STUB",
            json={"key": "414979709", "pin": "86612413"},
            headers={"X-Request-ID": "req-123"},
        )

        self.assertEqual(response.headers["X-Request-ID"], "req-123")


class TestUploadEndpoint(ApiTestCase):
    """Test cases for POST /api/upload."""

    def test_upload_confirmed(self):
        """Test an uploaded document is extracted and confirmed."""
        response = self.client.post(
            "/api/upload?provider=STUB",
            files={"file": ("proof.png", b"\x89PNG fake", "image/png")},
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "CONFIRMED")

    def test_upload_language_forwarded(self):
        """Test the language query parameter reaches OCR."""
        self.client.post(
            "/api/upload?provider=STUB&language=por",
            files={"file": ("proof.png", b"\x89PNG fake", "image/png")},
        )

        self.ocr_extractor.assert_awaited_once_with(b"\x89PNG fake", "por")

    def test_upload_without_codes(self):
        """Test a document without codes returns MISSING_DATA."""
        self.ocr_extractor.return_value = "blurry photo"

        response = self.client.post(
            "/api/upload?provider=STUB",
            files={"file": ("proof.jpg", b"\xff\xd8\xff fake", "image/jpeg")},
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "INVALID")
        self.assertEqual(response.json()["message"], "MISSING_DATA")

    def test_empty_upload_rejected(self):
        """Test an empty file returns 400."""
        response = self.client.post(
            "/api/upload?provider=STUB",
            files={"file": ("proof.pdf", b"", "application/pdf")},
        )

        self.assertEqual(response.status_code, 400)

    @patch("bankproof.api.routes.validation.settings")
    def test_oversized_upload_rejected(self, mock_settings):
        """Test files above MAX_UPLOAD_MB return 400."""
        mock_settings.MAX_UPLOAD_MB = 0
        mock_settings.DEFAULT_PROVIDER = "STUB"

        response = self.client.post(
            "/api/upload",
            files={"file": ("proof.pdf", b"%PDF-1.4 tiny", "application/pdf")},
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("max allowed size", response.json()["detail"])

    @patch("bankproof.api.routes.validation.settings")
    def test_upload_read_bounded_by_size_cap(self, mock_settings):
        """Test only one byte past the cap is read from the upload."""
        mock_settings.MAX_UPLOAD_MB = 1
        mock_settings.DEFAULT_PROVIDER = "STUB"
        cap = 1024 * 1024

        with patch(
            "starlette.datastructures.UploadFile.read",
            new_callable=AsyncMock,
            return_value=b"x" * (cap + 1),
        ) as mock_read:
            response = self.client.post(
                "/api/upload",
                files={"file": ("proof.pdf", b"%PDF-1.4 tiny", "application/pdf")},
            )

        self.assertEqual(response.status_code, 400)
        mock_read.assert_awaited_once_with(cap + 1)

    def test_missing_file_rejected(self):
        """Test a request without a file fails validation."""
        response = self.client.post("/api/upload?provider=STUB")

        self.assertEqual(response.status_code, 422)


class TestHealthEndpoints(unittest.TestCase):
    """Test cases for GET / and GET /health."""

    def setUp(self):
        """Use the real registry."""
        registry_module._registry = None
        self.client = TestClient(app)

    def tearDown(self):
        """Clear the global registry."""
        registry_module._registry = None

    def test_root(self):
        """Test the root endpoint reports healthy."""
        response = self.client.get("/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "healthy")

    def test_health_lists_providers(self):
        """Test /health lists the registered providers."""
        response = self.client.get("/health")

        body = response.json()
        self.assertEqual(response.status_code, 200)
        self.assertIn("BAI", body["providers"])
        self.assertEqual(body["status"], "healthy")


if __name__ == "__main__":
    unittest.main()
