"""Heuristic security and performance scanners for local source trees."""

from .config import AnalyzerConfig
from .engine import analyze_performance, run_scan, scan_security
from .models import (
    Issue,
    PerformanceCategory,
    ScanResult,
    ScanSummary,
    SecurityCategory,
    Severity,
)
from .report import format_results

__all__ = [
    "AnalyzerConfig",
    "Issue",
    "PerformanceCategory",
    "ScanResult",
    "ScanSummary",
    "SecurityCategory",
    "Severity",
    "analyze_performance",
    "format_results",
    "run_scan",
    "scan_security",
]
