"""Directory traversal shared by both analyzers."""

import asyncio
import logging
import os
from pathlib import Path
from typing import AsyncGenerator, NamedTuple, Optional

logger = logging.getLogger(__name__)


# Directories skipped by every analyzer
DEFAULT_SKIP_DIRS: frozenset[str] = frozenset({
    "node_modules",
    ".git",
    "dist",
    "build",
    "coverage",
    ".next",
    "out",
    "tmp",
    "temp",
    ".cache",
})

# Extra directories skipped by the security analyzer
SECURITY_SKIP_DIRS: frozenset[str] = DEFAULT_SKIP_DIRS | frozenset({
    "vendor",
    "__pycache__",
    "target",
})


class DirEntry(NamedTuple):
    name: str
    is_dir: bool
    is_file: bool


def _list_dir(path: Path) -> list[DirEntry]:
    """List a directory in name order without following directory symlinks."""
    entries = []
    with os.scandir(path) as it:
        for entry in it:
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = entry.is_file()
            except OSError:
                continue
            entries.append(DirEntry(entry.name, is_dir, is_file))
    entries.sort(key=lambda e: e.name)
    return entries


def is_excluded(name: str, relative_path: str, skip: frozenset[str]) -> bool:
    """Check whether a directory should be skipped.

    A directory is skipped when its own name is in ``skip`` or when its
    root-relative path begins with an excluded segment followed by ``/``.
    """
    if name in skip:
        return True
    return any(relative_path.startswith(f"{excluded}/") for excluded in skip)


async def walk_files(
    root: str | Path,
    extensions: frozenset[str],
    skip_dirs: frozenset[str] = DEFAULT_SKIP_DIRS,
    max_depth: Optional[int] = None,
) -> AsyncGenerator[tuple[Path, str], None]:
    """Walk a directory tree yielding files that pass the filters.

    Args:
        root: Directory to walk.
        extensions: Lower-case file extensions to include (e.g. ``".py"``).
        skip_dirs: Directory names to skip.
        max_depth: Deepest directory level to enter below ``root``; None walks everything.

    Yields:
        ``(absolute_path, relative_path)`` tuples; the relative path uses ``/`` separators.
    """
    root = Path(root)
    if not root.is_dir():
        return

    pending: list[tuple[Path, int]] = [(root, 0)]
    while pending:
        current, depth = pending.pop()
        try:
            entries = await asyncio.to_thread(_list_dir, current)
        except OSError as e:
            logger.debug(f"Skipping unreadable directory {current}: {e}")
            continue

        subdirs = []
        for entry in entries:
            full_path = current / entry.name
            relative = full_path.relative_to(root).as_posix()

            if entry.is_dir:
                if is_excluded(entry.name, relative, skip_dirs):
                    continue
                if max_depth is not None and depth + 1 > max_depth:
                    continue
                subdirs.append((full_path, depth + 1))
            elif entry.is_file and full_path.suffix.lower() in extensions:
                yield full_path, relative

        # Files of a directory come before its subdirectories, which are then
        # visited depth-first in name order.
        pending.extend(reversed(subdirs))
