import os

import pytest

from flagwatch import file_scanner
from flagwatch.errors import FileScanError
from flagwatch.file_scanner import scan_files


def rel(paths, root):
    return [os.path.relpath(p, root).replace(os.sep, "/") for p in paths]


def test_missing_root_raises(tmp_path):
    missing = tmp_path / "nope"
    with pytest.raises(FileScanError) as exc_info:
        scan_files(missing, ["**/*.ts"], [])
    assert exc_info.value.file_path == str(missing)


def test_file_root_included_or_not(make_tree):
    root = make_tree({"src/app.ts": "x", "src/app.py": "y"})
    ts = str(root / "src" / "app.ts")
    py = str(root / "src" / "app.py")
    assert scan_files(ts, ["**/*.ts"], []) == [ts]
    assert scan_files(py, ["**/*.ts"], []) == []
    assert scan_files(ts, ["**/*.ts"], ["**/app.ts"]) == []


def test_file_root_is_matched_relative_to_its_directory(make_tree):
    root = make_tree({"src/app.ts": ""})
    ts = str(root / "src" / "app.ts")
    assert rel(scan_files(root, ["src/*.ts"], []), root) == ["src/app.ts"]
    assert scan_files(ts, ["src/*.ts"], []) == []
    assert scan_files(ts, ["*.ts"], []) == [ts]
    assert scan_files(ts, ["**/*.ts"], []) == [ts]


def test_no_include_means_everything(make_tree):
    root = make_tree({"a.txt": "", "b/c.md": "", "b/d/e.ts": ""})
    assert rel(scan_files(root, [], []), root) == ["a.txt", "b/c.md", "b/d/e.ts"]


def test_include_filters_files_but_directories_are_walked(make_tree):
    root = make_tree({"src/app.ts": "", "src/util/helper.ts": "", "README.md": ""})
    assert rel(scan_files(root, ["**/*.ts"], []), root) == ["src/app.ts", "src/util/helper.ts"]


def test_root_relative_patterns(make_tree):
    root = make_tree({"src/app.ts": "", "lib/app.ts": ""})
    assert rel(scan_files(root, ["src/*.ts"], []), root) == ["src/app.ts"]


def test_result_is_sorted_by_full_path(make_tree):
    root = make_tree({"b.ts": "", "a/z.ts": "", "a.ts": "", "C.ts": ""})
    found = scan_files(root, [], [])
    assert found == sorted(found)
    assert rel(found, root) == ["C.ts", "a.ts", "a/z.ts", "b.ts"]


def test_excluded_directory_is_pruned_without_being_read(make_tree, monkeypatch):
    root = make_tree({
        "src/app.ts": "",
        "node_modules/pkg/index.ts": "",
        "src/node_modules/inner/index.ts": "",
    })
    visited = []
    real_scandir = os.scandir

    def tracking_scandir(path):
        visited.append(os.fspath(path))
        return real_scandir(path)

    monkeypatch.setattr(file_scanner.os, "scandir", tracking_scandir)

    found = scan_files(root, ["**/*.ts"], ["**/node_modules/**"])

    assert rel(found, root) == ["src/app.ts"]
    assert not any("node_modules" in v for v in visited)


def test_exclusion_wins_over_inclusion(make_tree):
    root = make_tree({"dist/bundle.js": "", "src/app.js": ""})
    found = scan_files(root, ["**/*.js", "dist/**"], ["**/dist/**"])
    assert rel(found, root) == ["src/app.js"]


def test_patterns_see_paths_relative_to_root(tmp_path):
    # an ancestor of the scan root named like an excluded directory must not hide the tree
    root = tmp_path / "build" / "project"
    (root / "src").mkdir(parents=True)
    (root / "src" / "app.ts").write_text("", encoding="utf-8")
    (root / "top.ts").write_text("", encoding="utf-8")
    found = scan_files(root, ["**/*.ts"], ["**/build/**"])
    assert rel(found, root) == ["src/app.ts", "top.ts"]


def test_unreadable_directory_fails_the_scan(make_tree, monkeypatch):
    root = make_tree({"ok/a.ts": "", "locked/b.ts": ""})
    locked = os.path.join(str(root), "locked")
    real_scandir = os.scandir

    def failing_scandir(path):
        if os.fspath(path) == locked:
            raise PermissionError(13, "Permission denied", locked)
        return real_scandir(path)

    monkeypatch.setattr(file_scanner.os, "scandir", failing_scandir)

    with pytest.raises(FileScanError) as exc_info:
        scan_files(root, [], [])
    # the failing directory is named, not the scan root
    assert exc_info.value.file_path == locked
    assert isinstance(exc_info.value.__cause__, PermissionError)


def test_symlinks_are_skipped(make_tree):
    root = make_tree({"real/a.ts": ""})
    try:
        os.symlink(root / "real", root / "link", target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported here")
    assert rel(scan_files(root, [], []), root) == ["real/a.ts"]
