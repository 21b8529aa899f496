"""
Shared constants for document extraction and verification.

Reason codes are part of the public outcome contract; callers match on them.
"""

# Document signatures
PDF_SIGNATURE = b"%PDF-"

# Reason codes
MISSING_DATA = "MISSING_DATA"
INVALID_INPUT_FORMAT = "INVALID_INPUT_FORMAT"
TIMEOUT = "TIMEOUT"
TEMPORARY_FAILURE = "TEMPORARY_FAILURE"
SERVER_ERROR = "SERVER_ERROR"
INVALID_REQUEST = "INVALID_REQUEST"
UNCONFIRMED_RESPONSE = "UNCONFIRMED_RESPONSE"

# HTTP defaults
JSON_HEADERS = {"Content-Type": "application/json"}
