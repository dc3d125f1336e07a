"""Checks that look at whole files and project manifests rather than lines."""

import asyncio
import json
import logging
import re
from pathlib import Path
from typing import Any, Optional

from .config import AnalyzerConfig
from .models import Issue, PerformanceCategory, SecurityCategory, Severity

logger = logging.getLogger(__name__)

MANIFEST_FILE = "package.json"
REQUIREMENTS_FILE = "requirements.txt"
BUILD_CONFIG_FILES = (
    "webpack.config.js",
    "vite.config.js",
    "rollup.config.js",
    "tsconfig.json",
)

# Python packages large enough to matter for install size and memory
HEAVY_PYTHON_PACKAGES = ("tensorflow", "torch", "opencv-python", "scipy")
MAX_PYTHON_REQUIREMENTS = 30

# npm scripts that pipe a download straight into a shell
_PIPED_DOWNLOAD_RE = re.compile(r"\b(?:curl|wget)\b[^|]*\|\s*(?:sudo\s+)?(?:ba|z)?sh\b")


def _read_text(path: Path) -> Optional[str]:
    try:
        return path.read_text(encoding="utf-8", errors="ignore")
    except (IOError, OSError):
        return None


async def _read_project_file(root: Path, name: str) -> Optional[str]:
    return await asyncio.to_thread(_read_text, root / name)


async def load_manifest(root: str | Path) -> Optional[dict[str, Any]]:
    """Load ``package.json`` from the scan root.

    Returns None if the file is missing, unreadable, malformed or not a JSON object.
    """
    content = await _read_project_file(Path(root), MANIFEST_FILE)
    if content is None:
        return None

    try:
        manifest = json.loads(content)
    except json.JSONDecodeError as e:
        logger.warning(f"Skipping malformed {MANIFEST_FILE}: {e}")
        return None

    if not isinstance(manifest, dict):
        logger.warning(f"Skipping {MANIFEST_FILE}: expected a JSON object")
        return None
    return manifest


def _dependency_names(manifest: dict[str, Any], key: str) -> list[str]:
    deps = manifest.get(key)
    return list(deps.keys()) if isinstance(deps, dict) else []


def check_file_size(size: int, file: str, config: AnalyzerConfig) -> list[Issue]:
    if size <= config.large_file_bytes:
        return []

    return [
        Issue(
            category=PerformanceCategory.bundle,
            severity=Severity.critical if size > config.critical_file_bytes else Severity.high,
            file=file,
            message=f"Large file size: {round(size / 1024)}KB",
            description="Large files can slow down loading and compilation",
            suggestion="Consider splitting into smaller modules or lazy loading",
            rule="large_file",
            estimated_impact="Bundle size and load time impact",
        )
    ]


def check_dependencies(manifest: dict[str, Any], config: AnalyzerConfig) -> list[Issue]:
    """Flag heavy runtime dependencies and an oversized dependency list.

    Only ``dependencies`` are considered; ``devDependencies`` do not ship.
    """
    issues = []
    dependencies = _dependency_names(manifest, "dependencies")
    heavy = set(config.heavy_dependencies)

    for dep in dependencies:
        if dep in heavy:
            issues.append(
                Issue(
                    category=PerformanceCategory.bundle,
                    severity=Severity.medium,
                    file=MANIFEST_FILE,
                    message=f"Heavy dependency: {dep}",
                    description="Large dependencies increase bundle size",
                    suggestion="Consider lighter alternatives or tree shaking",
                    rule="heavy_dependency",
                    estimated_impact="Bundle size and load time impact",
                )
            )

    if len(dependencies) > config.max_dependencies:
        issues.append(
            Issue(
                category=PerformanceCategory.bundle,
                severity=Severity.low,
                file=MANIFEST_FILE,
                message=f"Many dependencies: {len(dependencies)}",
                description="Large number of dependencies can impact performance",
                suggestion="Audit dependencies and remove unused ones",
                rule="dependency_count",
                estimated_impact="Bundle size impact",
            )
        )

    return issues


def check_manifest_scripts(manifest: dict[str, Any]) -> list[Issue]:
    """Flag npm scripts that pipe downloaded content into a shell."""
    scripts = manifest.get("scripts")
    if not isinstance(scripts, dict):
        return []

    issues = []
    for name, script in scripts.items():
        if isinstance(script, str) and _PIPED_DOWNLOAD_RE.search(script):
            issues.append(
                Issue(
                    category=SecurityCategory.configuration,
                    severity=Severity.high,
                    file=MANIFEST_FILE,
                    message=f"Potentially dangerous script: {name}",
                    description="Piping a download into a shell runs unverified remote code",
                    suggestion="Avoid piping curl/wget output directly to a shell; pin and verify downloads",
                    rule="piped_download_script",
                )
            )
    return issues


async def check_manifest(root: str | Path, config: AnalyzerConfig) -> list[Issue]:
    manifest = await load_manifest(root)
    if manifest is None:
        return []
    return check_dependencies(manifest, config)


async def check_security_manifest(root: str | Path) -> list[Issue]:
    manifest = await load_manifest(root)
    if manifest is None:
        return []
    return check_manifest_scripts(manifest)


def check_build_config(name: str, content: str) -> list[Issue]:
    """Substring checks on a build configuration file."""
    issues = []

    if "webpack" in name and "optimization" not in content:
        issues.append(
            Issue(
                category=PerformanceCategory.bundle,
                severity=Severity.medium,
                file=name,
                message="Webpack optimization not configured",
                description="Missing optimization settings can impact bundle size",
                suggestion="Add optimization configuration for production builds",
                rule="webpack_optimization",
                estimated_impact="Bundle optimization impact",
            )
        )

    if "source-map" in content and "production" in content:
        issues.append(
            Issue(
                category=PerformanceCategory.bundle,
                severity=Severity.low,
                file=name,
                message="Source maps in production",
                description="Source maps increase bundle size in production",
                suggestion="Disable source maps for production builds",
                rule="production_source_maps",
                estimated_impact="Bundle size impact",
            )
        )

    return issues


async def check_build_configs(root: str | Path) -> list[Issue]:
    root = Path(root)
    issues = []
    for name in BUILD_CONFIG_FILES:
        content = await _read_project_file(root, name)
        if content is not None:
            issues.extend(check_build_config(name, content))
    return issues


def check_requirements(content: str) -> list[Issue]:
    """Flag a long or heavy Python ``requirements.txt``."""
    requirements = [
        line.strip() for line in content.splitlines()
        if line.strip() and not line.strip().startswith(("#", "-"))
    ]
    names = [re.split(r"[\s<>=!~;\[]", req, maxsplit=1)[0].lower() for req in requirements]
    issues = []

    if len(requirements) > MAX_PYTHON_REQUIREMENTS:
        issues.append(
            Issue(
                category=PerformanceCategory.bundle,
                severity=Severity.medium,
                file=REQUIREMENTS_FILE,
                message=f"Many Python dependencies: {len(requirements)}",
                description="Many dependencies slow down installation and can cause conflicts",
                suggestion="Review dependencies and remove unused ones",
                rule="python_dependency_count",
                estimated_impact="Install time impact",
            )
        )

    for package in HEAVY_PYTHON_PACKAGES:
        if package in names:
            issues.append(
                Issue(
                    category=PerformanceCategory.bundle,
                    severity=Severity.low,
                    file=REQUIREMENTS_FILE,
                    message=f"Heavy Python package: {package}",
                    description="Heavy packages increase installation time and memory usage",
                    suggestion=f"Check whether {package} is necessary or use a lighter alternative",
                    rule="heavy_python_package",
                    estimated_impact="Install size and memory impact",
                )
            )

    return issues


async def check_python_requirements(root: str | Path) -> list[Issue]:
    content = await _read_project_file(Path(root), REQUIREMENTS_FILE)
    if content is None:
        return []
    return check_requirements(content)
