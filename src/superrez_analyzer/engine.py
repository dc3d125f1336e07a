"""Scan pipeline shared by the security and performance analyzers."""

import asyncio
import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Awaitable, Callable, NamedTuple, Optional

from .complexity import check_complexity, check_function_length
from .config import AnalyzerConfig
from .line_scanner import scan_lines
from .models import AnalyzerName, Issue, ScanResult
from .patterns import PERFORMANCE_CATALOG, SECURITY_CATALOG, RuleCatalog
from .recommendations import generate_recommendations, summarize
from .structural import (
    check_build_configs,
    check_file_size,
    check_manifest,
    check_python_requirements,
    check_security_manifest,
)
from .walker import DEFAULT_SKIP_DIRS, SECURITY_SKIP_DIRS, walk_files

logger = logging.getLogger(__name__)


SECURITY_EXTENSIONS: frozenset[str] = frozenset({
    ".js", ".ts", ".jsx", ".tsx", ".py", ".php", ".java", ".rb",
    ".go", ".rs", ".sol", ".c", ".cpp", ".h", ".hpp",
})

PERFORMANCE_EXTENSIONS: frozenset[str] = frozenset({
    ".js", ".jsx", ".ts", ".tsx", ".vue", ".svelte",
    ".py", ".java", ".go", ".rb", ".php", ".cs",
    ".cpp", ".c", ".h", ".swift", ".kt", ".rs",
    ".json", ".yaml", ".yml", ".sql",
})

ProjectCheck = Callable[[Path, AnalyzerConfig], Awaitable[list[Issue]]]


class AnalyzerProfile(NamedTuple):
    """What one analyzer walks, matches and checks."""

    name: AnalyzerName
    catalog: RuleCatalog
    extensions: frozenset[str]
    skip_dirs: frozenset[str]
    # Per-file whole-content checks (complexity, function length, file size)
    file_checks: bool
    # Run once against the scan root after the walk
    project_checks: tuple[ProjectCheck, ...] = ()


async def _security_project_checks(root: Path, config: AnalyzerConfig) -> list[Issue]:
    return await check_security_manifest(root)


async def _performance_project_checks(root: Path, config: AnalyzerConfig) -> list[Issue]:
    issues = await check_manifest(root, config)
    issues.extend(await check_build_configs(root))
    issues.extend(await check_python_requirements(root))
    return issues


SECURITY_PROFILE = AnalyzerProfile(
    name="security",
    catalog=SECURITY_CATALOG,
    extensions=SECURITY_EXTENSIONS,
    skip_dirs=SECURITY_SKIP_DIRS,
    file_checks=False,
    project_checks=(_security_project_checks,),
)

PERFORMANCE_PROFILE = AnalyzerProfile(
    name="performance",
    catalog=PERFORMANCE_CATALOG,
    extensions=PERFORMANCE_EXTENSIONS,
    skip_dirs=DEFAULT_SKIP_DIRS,
    file_checks=True,
    project_checks=(_performance_project_checks,),
)


def _read_file(path: Path) -> tuple[str, int]:
    size = path.stat().st_size
    with open(path, "r", encoding="utf-8", errors="ignore") as f:
        return f.read(), size


async def scan_file(
    path: Path,
    relative_path: str,
    profile: AnalyzerProfile,
    config: AnalyzerConfig,
) -> list[Issue]:
    """Run the per-file pipeline on one file.

    Returns an empty list if the file cannot be read.
    """
    try:
        content, size = await asyncio.to_thread(_read_file, path)
    except (IOError, OSError) as e:
        logger.debug(f"Skipping unreadable file {relative_path}: {e}")
        return []

    issues = scan_lines(content, profile.catalog, file=relative_path)
    if profile.file_checks:
        issues.extend(check_complexity(content, relative_path, config))
        issues.extend(check_function_length(content, relative_path, config))
        issues.extend(check_file_size(size, relative_path, config))
    return issues


async def run_scan(
    root: str | Path,
    profile: AnalyzerProfile,
    config: Optional[AnalyzerConfig] = None,
) -> ScanResult:
    """Scan a directory tree with one analyzer profile.

    Files are processed one at a time in traversal order. An unexpected error
    stops the scan but is not raised: the issues gathered so far are returned.

    Args:
        root: Directory to scan, already resolved by the caller.
        profile: Analyzer to run.
        config: Optional thresholds and extra exclusions.

    Returns:
        ScanResult with issues in discovery order.
    """
    config = config or AnalyzerConfig()
    root = Path(root)
    started = time.monotonic()
    timestamp = datetime.now(timezone.utc).isoformat()

    issues: list[Issue] = []
    files_scanned = 0
    skip_dirs = profile.skip_dirs | frozenset(config.extra_exclude_dirs)

    try:
        async for path, relative_path in walk_files(
            root, profile.extensions, skip_dirs, max_depth=config.max_depth
        ):
            files_scanned += 1
            issues.extend(await scan_file(path, relative_path, profile, config))

        for check in profile.project_checks:
            issues.extend(await check(root, config))
    except Exception as e:
        logger.exception(f"{profile.name} scan of {root} failed: {e}")

    duration_ms = int((time.monotonic() - started) * 1000)
    summary = summarize(issues)
    recommendations = generate_recommendations(issues, summary, profile.name)

    logger.info(
        f"{profile.name} scan of {root}: {files_scanned} files, "
        f"{summary.total_issues} issues in {duration_ms}ms"
    )

    return ScanResult(
        analyzer=profile.name,
        timestamp=timestamp,
        issues=tuple(issues),
        files_scanned=files_scanned,
        duration_ms=duration_ms,
        summary=summary,
        recommendations=tuple(recommendations),
    )


async def scan_security(root: str | Path, config: Optional[AnalyzerConfig] = None) -> ScanResult:
    """Run the security analyzer over ``root``."""
    return await run_scan(root, SECURITY_PROFILE, config)


async def analyze_performance(root: str | Path, config: Optional[AnalyzerConfig] = None) -> ScanResult:
    """Run the performance analyzer over ``root``."""
    return await run_scan(root, PERFORMANCE_PROFILE, config)


ANALYZERS: dict[str, Callable[..., Awaitable[ScanResult]]] = {
    "security": scan_security,
    "performance": analyze_performance,
}
