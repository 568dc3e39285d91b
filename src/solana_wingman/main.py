"""FastAPI application for the Solana gotcha scanner."""

import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .models import ScanInput, ScanReport
from .scanner import scan_directory

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Solana Wingman",
    description="Scans Solana/Anchor programs for common gotchas",
    version="0.1.0",
)

# CORS - allow common development origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://localhost:3000",
        "http://localhost:8000",
    ],
    allow_methods=["POST", "GET"],
    allow_headers=["*"],
)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


@app.post("/scan", response_model=ScanReport)
async def scan(request: ScanInput) -> ScanReport:
    """
    Scan a directory of Rust sources for Solana gotchas.

    - **path**: Directory to scan (defaults to the working directory)
    """
    logger.info(f"Scanning directory: {request.path}")
    try:
        return scan_directory(request.path)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Scan failed: {e}")
        raise HTTPException(status_code=500, detail=f"Scan failed: {str(e)}")
