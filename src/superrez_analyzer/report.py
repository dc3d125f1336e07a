"""Plain-text rendering of scan results."""

from .models import ScanResult

DEFAULT_MAX_ISSUES = 10

_TITLES = {
    "security": "Security Scan Results",
    "performance": "Performance Analysis Results",
}


def format_location(file: str, line: int | None) -> str:
    return f"{file}:{line}" if line else file


def format_results(result: ScanResult, max_issues: int = DEFAULT_MAX_ISSUES) -> str:
    """Render counts, the first ``max_issues`` issues and the recommendations."""
    title = _TITLES[result.analyzer]
    summary = result.summary
    lines = [
        title,
        "=" * len(title),
        f"Scanned {result.files_scanned} files in {result.duration_ms}ms",
        "",
        "Issues Summary:",
        f"  Critical: {summary.critical}",
        f"  High:     {summary.high}",
        f"  Medium:   {summary.medium}",
        f"  Low:      {summary.low}",
        f"  Total:    {summary.total_issues}",
        "",
    ]

    if result.issues:
        lines.append("Top Issues:")
        for issue in result.issues[:max_issues]:
            lines.append(f"  [{issue.severity.value.upper()}] {issue.category.value}: {issue.message}")
            lines.append(f"    File: {format_location(issue.file, issue.line)}")
            lines.append(f"    {issue.suggestion}")
        remaining = len(result.issues) - max_issues
        if remaining > 0:
            lines.append(f"  ... and {remaining} more issues")
        lines.append("")

    if result.recommendations:
        lines.append("Recommendations:")
        lines.extend(f"  - {rec}" for rec in result.recommendations)

    return "\n".join(lines)
