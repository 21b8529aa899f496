"""
FastAPI application for validating bank proof-of-payment documents.
Extracts the key/pin pair from PDFs or images and confirms it with the bank.
"""
from fastapi import FastAPI
import logging

from bankproof.api.routes import health, validation
from bankproof.core.logging import setup_logging
from bankproof.core.middleware import RequestIDMiddleware

# Configure logging
setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="BankProof Validator",
    description="API for extracting and verifying proof-of-payment codes",
    version="1.0.0"
)

# Middleware
app.add_middleware(RequestIDMiddleware)

# Include routers
app.include_router(health.router)
app.include_router(validation.router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=3001, workers=1)
