"""Pydantic models for the static analysis engine."""

from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    """Severity of a finding, ordered low < medium < high < critical."""

    low = "low"
    medium = "medium"
    high = "high"
    critical = "critical"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    Severity.low: 0,
    Severity.medium: 1,
    Severity.high: 2,
    Severity.critical: 3,
}


class SecurityCategory(str, Enum):
    """Category of a security finding."""

    secrets = "secrets"
    sql_injection = "sql-injection"
    xss = "xss"
    weak_crypto = "weak-crypto"
    path_traversal = "path-traversal"
    command_injection = "command-injection"
    insecure_transport = "insecure-transport"
    smart_contract = "smart-contract"
    configuration = "configuration"


class PerformanceCategory(str, Enum):
    """Category of a performance finding."""

    memory = "memory"
    cpu = "cpu"
    io = "io"
    network = "network"
    bundle = "bundle"
    code_smell = "code-smell"


IssueCategory = Union[SecurityCategory, PerformanceCategory]

AnalyzerName = Literal["security", "performance"]


class Issue(BaseModel):
    """A single heuristic finding."""

    model_config = ConfigDict(frozen=True)

    category: IssueCategory = Field(description="Analyzer-specific finding category")
    severity: Severity = Field(description="Severity level: critical, high, medium, low")
    file: str = Field(description="File path relative to the scan root")
    line: Optional[int] = Field(
        default=None, ge=1, description="1-based line number, absent for whole-file findings"
    )
    message: str = Field(min_length=1, description="Short description of the finding")
    description: str = Field(default="", description="Longer explanation of why it matters")
    suggestion: str = Field(min_length=1, description="Recommended remediation")
    rule: str = Field(default="", description="Machine name of the rule or check that fired")
    estimated_impact: Optional[str] = Field(
        default=None, description="Expected impact area (performance findings)"
    )


class ScanSummary(BaseModel):
    """Summary counts by severity."""

    model_config = ConfigDict(frozen=True)

    critical: int = Field(default=0, description="Number of critical issues")
    high: int = Field(default=0, description="Number of high issues")
    medium: int = Field(default=0, description="Number of medium issues")
    low: int = Field(default=0, description="Number of low issues")
    total_issues: int = Field(default=0, description="Total number of issues")


class ScanResult(BaseModel):
    """Complete output of one analyzer run."""

    model_config = ConfigDict(frozen=True)

    analyzer: AnalyzerName = Field(description="Which analyzer produced this result")
    timestamp: str = Field(description="ISO-8601 UTC time the scan started")
    issues: tuple[Issue, ...] = Field(
        default=(), description="Findings in discovery order"
    )
    files_scanned: int = Field(
        default=0, description="Files that passed the extension and exclusion filters"
    )
    duration_ms: int = Field(default=0, description="Wall-clock scan time in milliseconds")
    summary: ScanSummary = Field(
        default_factory=ScanSummary, description="Summary counts by severity"
    )
    recommendations: tuple[str, ...] = Field(
        default=(), description="Ordered advisory messages"
    )
