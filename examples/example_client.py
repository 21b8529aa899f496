"""
Example client script for the BankProof Validator API.
"""
import mimetypes
import sys
from pathlib import Path
from typing import Optional

import httpx


def validate_codes(key: str, pin: str, api_url: str = "http://localhost:3001", provider: Optional[str] = None):
    """
    Validate a typed key/pin pair.

    Args:
        key: Primary code ("chave")
        pin: Secondary code
        api_url: API base URL
        provider: Provider name (server default if None)
    """
    params = {"provider": provider} if provider else {}
    try:
        response = httpx.post(
            f"{api_url}/api/validate",
            json={"key": key, "pin": pin},
            params=params,
            timeout=30.0
        )
        response.raise_for_status()
        _print_outcome(response.json())

    except httpx.HTTPStatusError as e:
        print(f"✗ HTTP Error {e.response.status_code}: {e.response.text}")
    except httpx.RequestError as e:
        print(f"✗ Request Error: {e}")


def upload_document(path: str, api_url: str = "http://localhost:3001", language: Optional[str] = None):
    """
    Upload a proof-of-payment PDF or image for extraction and validation.

    Args:
        path: Path to the document
        api_url: API base URL
        language: OCR language hint (e.g. "por")
    """
    document = Path(path)
    if not document.exists():
        print(f"Error: File not found: {path}")
        return

    content_type = mimetypes.guess_type(document.name)[0] or "application/octet-stream"
    params = {"language": language} if language else {}
    print(f"Uploading: {path} ({content_type})")

    try:
        with open(document, "rb") as fh:
            response = httpx.post(
                f"{api_url}/api/upload",
                files={"file": (document.name, fh, content_type)},
                params=params,
                timeout=120.0  # OCR can be slow
            )
        response.raise_for_status()
        _print_outcome(response.json())

    except httpx.HTTPStatusError as e:
        print(f"✗ HTTP Error {e.response.status_code}: {e.response.text}")
    except httpx.RequestError as e:
        print(f"✗ Request Error: {e}")


def _print_outcome(outcome: dict):
    marker = "✓" if outcome.get("status") == "CONFIRMED" else "✗"
    print(f"{marker} {outcome.get('status')} (provider={outcome.get('provider')})")
    if outcome.get("message"):
        print(f"  Reason: {outcome['message']}")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage:")
        print("  python example_client.py <document> [language]")
        print("  python example_client.py --codes <key> <pin>")
        print()
        print("Examples:")
        print("  python example_client.py comprovativo.pdf")
        print("  python example_client.py talao.jpg por")
        print("  python example_client.py --codes 414979709 86612413")
        sys.exit(1)

    if sys.argv[1] == "--codes":
        if len(sys.argv) < 4:
            print("Error: --codes needs <key> <pin>")
            sys.exit(1)
        validate_codes(sys.argv[2], sys.argv[3])
    else:
        upload_document(sys.argv[1], language=sys.argv[2] if len(sys.argv) > 2 else None)
