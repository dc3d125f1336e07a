"""Tests for directory traversal."""

import pytest

from superrez_analyzer import walker
from superrez_analyzer.walker import (
    DEFAULT_SKIP_DIRS,
    SECURITY_SKIP_DIRS,
    is_excluded,
    walk_files,
)

from conftest import write_file

EXTS = frozenset({".py", ".js"})


async def _collect(root, extensions=EXTS, skip=DEFAULT_SKIP_DIRS, max_depth=None):
    return [rel async for _, rel in walk_files(root, extensions, skip, max_depth=max_depth)]


class TestIsExcluded:
    """Test directory exclusion rules."""

    def test_name_match(self):
        assert is_excluded("dist", "dist", DEFAULT_SKIP_DIRS)
        assert is_excluded("node_modules", "src/node_modules", DEFAULT_SKIP_DIRS)

    def test_path_prefix_match(self):
        assert is_excluded("inner", "dist/inner", DEFAULT_SKIP_DIRS)

    def test_partial_name_not_excluded(self):
        assert not is_excluded("dist-utils", "dist-utils", DEFAULT_SKIP_DIRS)
        assert not is_excluded("lib", "dist-utils/lib", DEFAULT_SKIP_DIRS)

    def test_security_extras(self):
        assert "vendor" in SECURITY_SKIP_DIRS
        assert "vendor" not in DEFAULT_SKIP_DIRS
        assert DEFAULT_SKIP_DIRS <= SECURITY_SKIP_DIRS


class TestWalkFiles:
    """Test file enumeration."""

    @pytest.mark.asyncio
    async def test_filters_by_extension(self, temp_dir):
        write_file(temp_dir, "a.py", "x = 1\n")
        write_file(temp_dir, "notes.txt", "hello\n")
        write_file(temp_dir, "sub/c.js", "let y;\n")

        assert await _collect(temp_dir) == ["a.py", "sub/c.js"]

    @pytest.mark.asyncio
    async def test_extension_match_is_case_insensitive(self, temp_dir):
        write_file(temp_dir, "LEGACY.PY", "x = 1\n")

        assert await _collect(temp_dir) == ["LEGACY.PY"]

    @pytest.mark.asyncio
    async def test_yields_absolute_and_relative_paths(self, temp_dir):
        write_file(temp_dir, "pkg/mod.py", "")

        results = [item async for item in walk_files(temp_dir, EXTS)]

        assert len(results) == 1
        absolute, relative = results[0]
        assert absolute == temp_dir / "pkg" / "mod.py"
        assert relative == "pkg/mod.py"

    @pytest.mark.asyncio
    async def test_skips_excluded_directories(self, temp_dir):
        write_file(temp_dir, "node_modules/pkg/index.js", "")
        write_file(temp_dir, "src/build/out.js", "")
        write_file(temp_dir, ".git/hooks/pre-commit.py", "")
        write_file(temp_dir, "dist-utils/helper.js", "")
        write_file(temp_dir, "src/app.js", "")

        assert await _collect(temp_dir) == ["dist-utils/helper.js", "src/app.js"]

    @pytest.mark.asyncio
    async def test_deterministic_order(self, temp_dir):
        write_file(temp_dir, "b.py", "")
        write_file(temp_dir, "a.py", "")
        write_file(temp_dir, "z/inner.py", "")
        write_file(temp_dir, "m/inner.py", "")

        first = await _collect(temp_dir)
        second = await _collect(temp_dir)

        assert first == ["a.py", "b.py", "m/inner.py", "z/inner.py"]
        assert first == second

    @pytest.mark.asyncio
    async def test_max_depth(self, temp_dir):
        write_file(temp_dir, "top.py", "")
        write_file(temp_dir, "one/mid.py", "")
        write_file(temp_dir, "one/two/deep.py", "")

        assert await _collect(temp_dir, max_depth=0) == ["top.py"]
        assert await _collect(temp_dir, max_depth=1) == ["top.py", "one/mid.py"]
        assert len(await _collect(temp_dir)) == 3

    @pytest.mark.asyncio
    async def test_nonexistent_root(self, temp_dir):
        assert await _collect(temp_dir / "missing") == []

    @pytest.mark.asyncio
    async def test_empty_directory(self, temp_dir):
        assert await _collect(temp_dir) == []

    @pytest.mark.asyncio
    async def test_unreadable_directory_is_skipped(self, temp_dir, monkeypatch):
        write_file(temp_dir, "ok/a.py", "")
        write_file(temp_dir, "locked/b.py", "")
        original = walker._list_dir

        def fake_list_dir(path):
            if path.name == "locked":
                raise PermissionError("denied")
            return original(path)

        monkeypatch.setattr(walker, "_list_dir", fake_list_dir)

        assert await _collect(temp_dir) == ["ok/a.py"]
