"""FastAPI application for the static analysis engine."""

import logging
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .config import AnalyzerConfig
from .engine import ANALYZERS
from .models import AnalyzerName, ScanResult

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="SuperRez Analyzer",
    description="Heuristic security and performance scanning of local source trees",
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


class ScanRequest(BaseModel):
    """Request body for scanning a local directory."""

    path: str = Field(description="Local directory to scan")
    analyzer: AnalyzerName = Field(
        default="security", description="Which analyzer to run: security or performance"
    )
    options: AnalyzerConfig = Field(
        default_factory=AnalyzerConfig, description="Thresholds and extra exclusions"
    )


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


@app.post("/scan", response_model=ScanResult)
async def scan(request: ScanRequest) -> ScanResult:
    """
    Scan a local directory.

    - **path**: Directory to scan
    - **analyzer**: security or performance
    - **options**: Optional thresholds and extra excluded directories
    """
    scan_path = Path(request.path).resolve()
    if not scan_path.exists():
        raise HTTPException(status_code=400, detail=f"Path does not exist: {request.path}")
    if not scan_path.is_dir():
        raise HTTPException(status_code=400, detail=f"Path is not a directory: {request.path}")

    logger.info(f"Running {request.analyzer} scan on {scan_path}")
    return await ANALYZERS[request.analyzer](scan_path, request.options)
