"""Tests for file system traversal functionality."""

import logging
from pathlib import Path

import pytest

from lintel.traversal import (
    DEFAULT_IGNORE_DIRS,
    collect_targets,
    find_source_files,
    is_source_file,
    should_ignore_directory,
)


class TestFileTypeChecks:
    def test_known_extensions(self):
        for name in ("a.js", "a.jsx", "a.mjs", "a.cjs", "a.ts", "a.tsx", "a.mts", "a.cts"):
            assert is_source_file(Path(name)), name

    def test_case_insensitive(self):
        assert is_source_file(Path("APP.JS"))

    def test_rejects_other_files(self):
        assert not is_source_file(Path("main.c"))
        assert not is_source_file(Path("README.md"))
        assert not is_source_file(Path("package.json"))

    def test_declaration_files_skipped(self):
        assert not is_source_file(Path("types.d.ts"))
        assert not is_source_file(Path("types.d.mts"))

    def test_extension_filter(self):
        assert is_source_file(Path("a.js"), extensions={".js"})
        assert not is_source_file(Path("a.ts"), extensions={".js"})


class TestDirectoryFiltering:
    def test_ignored(self):
        assert should_ignore_directory(Path("node_modules"), {"node_modules"})
        assert not should_ignore_directory(Path("src"), {"node_modules"})

    def test_case_sensitive(self):
        assert not should_ignore_directory(Path("Dist"), {"dist"})

    def test_defaults(self):
        assert "node_modules" in DEFAULT_IGNORE_DIRS
        assert "dist" in DEFAULT_IGNORE_DIRS
        assert ".git" in DEFAULT_IGNORE_DIRS


class TestTraversal:
    @pytest.fixture
    def temp_project(self, tmp_path):
        # tmp_path/
        #   src/app.js, src/util.ts, src/types.d.ts
        #   lib/index.mjs
        #   node_modules/dep/index.js (ignored)
        #   dist/bundle.js (ignored)
        #   README.md
        (tmp_path / "src").mkdir()
        (tmp_path / "lib").mkdir()
        (tmp_path / "node_modules" / "dep").mkdir(parents=True)
        (tmp_path / "dist").mkdir()

        (tmp_path / "src" / "app.js").write_text("delete a;")
        (tmp_path / "src" / "util.ts").write_text("export const x = 1;")
        (tmp_path / "src" / "types.d.ts").write_text("declare const y: number;")
        (tmp_path / "lib" / "index.mjs").write_text("export {};")
        (tmp_path / "node_modules" / "dep" / "index.js").write_text("module.exports = 1;")
        (tmp_path / "dist" / "bundle.js").write_text("!function(){}();")
        (tmp_path / "README.md").write_text("# Project")
        return tmp_path

    def test_collects_sources(self, temp_project):
        names = {f.name for f in find_source_files(temp_project)}
        assert names == {"app.js", "util.ts", "index.mjs"}

    def test_custom_ignore_dirs(self, temp_project):
        names = {f.name for f in find_source_files(temp_project, ignore_dirs={"node_modules"})}
        assert "bundle.js" in names
        assert "index.js" not in names

    def test_extension_filter(self, temp_project):
        names = {f.name for f in find_source_files(temp_project, extensions={".ts"})}
        assert names == {"util.ts"}

    def test_filter_function(self, temp_project):
        files = find_source_files(temp_project, filter_fn=lambda p: p.name.startswith("app"))
        assert [f.name for f in files] == ["app.js"]

    def test_sorted(self, temp_project):
        files = find_source_files(temp_project)
        assert files == sorted(files)

    def test_nonexistent(self):
        with pytest.raises(FileNotFoundError):
            find_source_files(Path("/nonexistent/directory"))

    def test_not_a_directory(self, tmp_path):
        f = tmp_path / "a.js"
        f.write_text("1;")
        with pytest.raises(NotADirectoryError):
            find_source_files(f)

    def test_logs_progress(self, temp_project, caplog):
        with caplog.at_level(logging.INFO):
            find_source_files(temp_project)
        assert "Searching" in caplog.text
        assert "Found 3 source file(s)" in caplog.text

    def test_symlinks_not_followed(self, temp_project, tmp_path_factory):
        outside = tmp_path_factory.mktemp("outside")
        (outside / "linked.js").write_text("delete a;")
        try:
            (temp_project / "link").symlink_to(outside, target_is_directory=True)
        except OSError:
            pytest.skip("symlinks unsupported")
        names = {f.name for f in find_source_files(temp_project)}
        assert "linked.js" not in names


class TestCollectTargets:
    def test_files_and_directories(self, tmp_path):
        (tmp_path / "pkg").mkdir()
        (tmp_path / "pkg" / "a.js").write_text("1;")
        single = tmp_path / "b.ts"
        single.write_text("1;")
        files = collect_targets([single, tmp_path / "pkg"])
        assert [f.name for f in files] == ["b.ts", "a.js"]

    def test_missing_target(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            collect_targets([tmp_path / "missing.js"])

    def test_empty_directory_warns(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING):
            assert collect_targets([tmp_path]) == []
        assert "No source files" in caplog.text
