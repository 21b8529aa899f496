"""
Error handling utilities for extraction and verification.

Expected failure modes (missing data, bad format, transport problems,
authority rejections) are returned as outcomes, not raised. The exceptions
below cover configuration defects, unknown providers and rejected uploads.
"""
import logging
import time
import uuid
from contextvars import ContextVar
from functools import wraps
from typing import Awaitable, Callable, ParamSpec, TypeVar

from fastapi import HTTPException

logger = logging.getLogger(__name__)

# Context variable for request ID tracking across async contexts
request_id_var: ContextVar[str] = ContextVar('request_id', default='')

P = ParamSpec('P')
T = TypeVar('T')


# ============================================================================
# Custom Exceptions
# ============================================================================

class BankProofError(Exception):
    """Base exception for proof-of-payment processing errors."""
    pass


class ProviderConfigurationError(BankProofError):
    """Verification provider not properly configured."""
    pass


class UnknownProviderError(BankProofError):
    """No verification provider registered under the requested name."""

    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = available
        super().__init__(
            f"Unknown verification provider: {name}. "
            f"Available providers: {', '.join(available) or 'none'}"
        )


class DocumentValidationError(BankProofError):
    """Uploaded document rejected before extraction."""
    pass


class RequestCancelledError(BankProofError):
    """In-flight verification request was cancelled.

    ``timed_out`` is True only when the cancellation came from the
    request's own timeout timer.
    """

    def __init__(self, timed_out: bool):
        self.timed_out = timed_out
        super().__init__("timed out" if timed_out else "cancelled by caller")


# ============================================================================
# Route Error Decorator
# ============================================================================

def handle_validation_errors(
    error_message: str = "Unexpected error"
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """
    Decorator mapping library errors to HTTP exceptions for API routes.

    Assigns a request ID when none is set, logs timing, and converts
    errors to HTTPException with the request ID echoed back.

    Args:
        error_message: Detail prefix for unexpected failures

    Example:
        @handle_validation_errors("Failed to validate upload")
        async def upload(file: UploadFile) -> VerificationOutcome:
            ...
    """
    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:

        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            if not request_id_var.get():
                request_id_var.set(str(uuid.uuid4()))

            request_id = request_id_var.get()
            start_time = time.time()

            try:
                logger.info(f"[{request_id}] Starting {func.__name__}")
                result = await func(*args, **kwargs)
                elapsed = time.time() - start_time
                logger.info(f"[{request_id}] Completed {func.__name__} in {elapsed:.2f}s")
                return result
            except HTTPException:
                raise
            except DocumentValidationError as e:
                elapsed = time.time() - start_time
                logger.error(f"[{request_id}] Document rejected after {elapsed:.2f}s: {e}")
                raise HTTPException(
                    status_code=400,
                    detail=str(e),
                    headers={"X-Request-ID": request_id}
                )
            except UnknownProviderError as e:
                elapsed = time.time() - start_time
                logger.error(f"[{request_id}] Unknown provider after {elapsed:.2f}s: {e}")
                raise HTTPException(
                    status_code=404,
                    detail=str(e),
                    headers={"X-Request-ID": request_id}
                )
            except ProviderConfigurationError as e:
                elapsed = time.time() - start_time
                logger.error(f"[{request_id}] Configuration error after {elapsed:.2f}s: {e}")
                raise HTTPException(
                    status_code=500,
                    detail=f"Service configuration error: {str(e)}",
                    headers={"X-Request-ID": request_id}
                )
            except Exception as e:
                elapsed = time.time() - start_time
                logger.exception(
                    f"[{request_id}] {error_message} in {func.__name__} after {elapsed:.2f}s: {e}"
                )
                raise HTTPException(
                    status_code=500,
                    detail=f"{error_message}: {str(e)}",
                    headers={"X-Request-ID": request_id}
                )

        return wrapper

    return decorator
