"""Severity tallies and advisory recommendations for a finished scan."""

from typing import Iterable

from .models import (
    AnalyzerName,
    Issue,
    IssueCategory,
    PerformanceCategory,
    ScanSummary,
    SecurityCategory,
    Severity,
)

# Above this many high-severity issues the scan asks for prioritization
HIGH_ISSUE_THRESHOLD = 5

# Evaluated in order; one message per category present in the results
CATEGORY_RECOMMENDATIONS: tuple[tuple[IssueCategory, str], ...] = (
    (PerformanceCategory.memory, "Memory optimization needed - review resource management"),
    (PerformanceCategory.bundle, "Bundle size optimization needed - review dependencies"),
    (PerformanceCategory.cpu, "CPU optimization needed - review algorithms"),
    (SecurityCategory.secrets, "Rotate exposed credentials and move them to environment variables"),
    (SecurityCategory.sql_injection, "Switch string-built SQL to parameterized queries"),
    (SecurityCategory.xss, "Sanitize output written to the DOM and avoid eval()"),
    (SecurityCategory.weak_crypto, "Replace weak hashing, ciphers and random sources with modern primitives"),
)

_NO_ISSUES = {
    "security": "No security issues detected - good job!",
    "performance": "No major performance issues detected - good job!",
}


def summarize(issues: Iterable[Issue]) -> ScanSummary:
    """Count issues by severity."""
    counts = {severity: 0 for severity in Severity}
    for issue in issues:
        counts[issue.severity] += 1

    return ScanSummary(
        critical=counts[Severity.critical],
        high=counts[Severity.high],
        medium=counts[Severity.medium],
        low=counts[Severity.low],
        total_issues=sum(counts.values()),
    )


def generate_recommendations(
    issues: list[Issue],
    summary: ScanSummary,
    analyzer: AnalyzerName = "performance",
) -> list[str]:
    """Derive ordered recommendations from the findings.

    An empty scan gets exactly one positive message and nothing else.
    """
    if summary.total_issues == 0:
        return [_NO_ISSUES[analyzer]]

    recs = []
    if summary.critical > 0:
        recs.append(f"Critical {analyzer} issues found - immediate attention required")
    if summary.high > HIGH_ISSUE_THRESHOLD:
        recs.append("Multiple high-impact issues detected - prioritize optimization")

    present = {issue.category for issue in issues}
    for category, message in CATEGORY_RECOMMENDATIONS:
        if category in present:
            recs.append(message)

    return recs
