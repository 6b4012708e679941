# src/flagwatch/file_scanner.py

import logging
import os

from .errors import FileScanError
from .glob_matcher import matches_any, normalize_path

logger = logging.getLogger(__name__)


def _candidates(path, root):
    """
    Forms a pattern may match: the path relative to the scan root, bare and
    with a "./" prefix so that "**/x" also reaches top-level entries.
    """
    rel = normalize_path(os.path.relpath(path, root))
    return (rel, "./" + rel)


def is_excluded(path, exclude_patterns, root=None, is_dir=False) -> bool:
    if not exclude_patterns:
        return False
    for form in _candidates(path, root):
        if matches_any(form, exclude_patterns):
            return True
        # "**/node_modules/**" must prune the directory itself, not just its children
        if is_dir and matches_any(form + "/", exclude_patterns):
            return True
    return False


def should_include_file(path, include_patterns, exclude_patterns, root=None) -> bool:
    """Exclusion wins; with no include patterns everything else is kept."""
    if is_excluded(path, exclude_patterns, root):
        return False
    if not include_patterns:
        return True
    return any(matches_any(form, include_patterns) for form in _candidates(path, root))


def _scan_directory(dirpath, root, include_patterns, exclude_patterns, files):
    try:
        with os.scandir(dirpath) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as exc:
        raise FileScanError(f"Failed to scan directory: {dirpath}", dirpath) from exc

    for entry in entries:
        full_path = os.path.join(dirpath, entry.name)
        # symlinks are neither followed nor reported
        if entry.is_dir(follow_symlinks=False):
            if is_excluded(full_path, exclude_patterns, root, is_dir=True):
                logger.debug("Pruned directory: %s", full_path)
                continue
            _scan_directory(full_path, root, include_patterns, exclude_patterns, files)
        elif entry.is_file(follow_symlinks=False):
            if should_include_file(full_path, include_patterns, exclude_patterns, root):
                files.append(full_path)


def scan_files(root_path, include_patterns=(), exclude_patterns=()):
    """
    Walk `root_path` and return the files passing the include/exclude globs,
    sorted by full path.

    Patterns see paths relative to `root_path`. A regular-file root is matched
    relative to its own directory, so it only sees its bare name:
    "src/*.ts" matches proj/src/app.ts when scanning proj, but not when
    scanning proj/src/app.ts directly ("**/*.ts" matches both ways).

    Raises FileScanError when the root is missing or a directory can't be read.
    """
    root_path = os.fspath(root_path)
    if not os.path.exists(root_path):
        raise FileScanError(f"Root path does not exist: {root_path}", root_path)

    if os.path.isfile(root_path):
        root = os.path.dirname(root_path) or os.curdir
        if should_include_file(root_path, include_patterns, exclude_patterns, root):
            return [root_path]
        return []

    files = []
    _scan_directory(root_path, root_path, include_patterns, exclude_patterns, files)
    return sorted(files)
