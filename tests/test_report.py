"""Tests for plain-text result rendering."""

from superrez_analyzer.models import (
    Issue,
    PerformanceCategory,
    ScanResult,
    ScanSummary,
    SecurityCategory,
    Severity,
)
from superrez_analyzer.report import format_location, format_results


def _result(issues=(), recommendations=("No security issues detected - good job!",)):
    return ScanResult(
        analyzer="security",
        timestamp="2024-01-01T00:00:00+00:00",
        issues=tuple(issues),
        files_scanned=3,
        duration_ms=12,
        summary=ScanSummary(high=len(issues), total_issues=len(issues)),
        recommendations=tuple(recommendations),
    )


def _issue(line=1):
    return Issue(
        category=SecurityCategory.xss,
        severity=Severity.high,
        file="src/app.js",
        line=line,
        message="Use of eval() function",
        suggestion="Sanitize user input",
    )


def test_format_location():
    assert format_location("a.js", 3) == "a.js:3"
    assert format_location("package.json", None) == "package.json"


def test_empty_result():
    text = format_results(_result())

    assert text.startswith("Security Scan Results")
    assert "Scanned 3 files in 12ms" in text
    assert "Total:    0" in text
    assert "Top Issues:" not in text
    assert "  - No security issues detected - good job!" in text


def test_issue_lines():
    text = format_results(_result([_issue(7)], ["Sanitize output"]))

    assert "[HIGH] xss: Use of eval() function" in text
    assert "File: src/app.js:7" in text
    assert "Sanitize user input" in text


def test_truncates_issue_list():
    text = format_results(_result([_issue(i) for i in range(1, 13)]), max_issues=10)

    assert text.count("[HIGH]") == 10
    assert "... and 2 more issues" in text


def test_performance_title():
    result = ScanResult(
        analyzer="performance",
        timestamp="2024-01-01T00:00:00+00:00",
        issues=(
            Issue(
                category=PerformanceCategory.bundle,
                severity=Severity.low,
                file="package.json",
                message="Many dependencies: 25",
                suggestion="Audit dependencies",
            ),
        ),
        summary=ScanSummary(low=1, total_issues=1),
    )

    text = format_results(result)

    assert text.startswith("Performance Analysis Results")
    assert "[LOW] bundle: Many dependencies: 25" in text
    assert "File: package.json\n" in text
