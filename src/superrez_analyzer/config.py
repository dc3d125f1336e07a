"""Tunable thresholds and filters for the analyzers."""

from typing import Optional

from pydantic import BaseModel, Field

MIB = 1024 * 1024

# Runtime dependencies known to add significant weight to a bundle
HEAVY_DEPENDENCIES: tuple[str, ...] = (
    "lodash",
    "moment",
    "rxjs",
    "firebase",
    "aws-sdk",
    "electron",
    "puppeteer",
    "selenium-webdriver",
)


class AnalyzerConfig(BaseModel):
    """Options accepted by both analyzers. All thresholds are strict (>)."""

    extra_exclude_dirs: list[str] = Field(
        default_factory=list,
        description="Additional directory names to skip (merged with the analyzer defaults)",
    )
    max_depth: Optional[int] = Field(
        default=None, ge=0, description="Maximum directory depth below the root; None = unbounded"
    )
    large_file_bytes: int = Field(default=MIB, description="File size above which a bundle issue is raised")
    critical_file_bytes: int = Field(default=5 * MIB, description="File size above which it becomes critical")
    complexity_high: int = Field(default=15, description="Aggregate complexity above which a file is flagged")
    complexity_critical: int = Field(default=30, description="Aggregate complexity above which it becomes critical")
    function_length_medium: int = Field(default=50, description="Function length (lines) above which it is flagged")
    function_length_high: int = Field(default=100, description="Function length (lines) above which it becomes high")
    heavy_dependencies: list[str] = Field(
        default_factory=lambda: list(HEAVY_DEPENDENCIES),
        description="Dependency names flagged as heavy when found in the manifest",
    )
    max_dependencies: int = Field(default=20, description="Runtime dependency count above which the manifest is flagged")
