# src/flagwatch/runner.py
"""
Pipeline: scan -> per-file detection -> analysis.

A file whose detection fails (bad pattern, unreadable, not UTF-8) is skipped
with a warning; every other failure ends the run.
"""
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed

from .analyzer import analyze_flags
from .detector import detect_definitions, detect_references, read_source
from .errors import FlagwatchError, InternalError, ParseError
from .file_scanner import scan_files
from .models import FlagwatchConfig

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_POLICY_VIOLATION = 1
EXIT_INTERNAL_FAILURE = 2

FILE_ERRORS = (ParseError, OSError, ValueError)


def detect_file(path, config):
    """References and definitions of one file."""
    content = read_source(path)
    refs = detect_references(content, config.flag_patterns, config.env_var_prefixes, filename=path)
    defs = detect_definitions(content, config.env_var_prefixes, filename=path)
    return refs, defs


def _detect_sequential(files, config):
    results = {}
    for idx, path in enumerate(files):
        try:
            results[idx] = detect_file(path, config)
        except FILE_ERRORS as exc:
            logger.warning("Failed to analyze file: %s (%s)", path, exc)
    return results


def _detect_parallel(files, config, max_workers):
    results = {}
    with ThreadPoolExecutor(max_workers=max_workers) as ex:
        future_map = {ex.submit(detect_file, path, config): idx for idx, path in enumerate(files)}
        for fut in as_completed(future_map):
            idx = future_map[fut]
            try:
                results[idx] = fut.result()
            except FILE_ERRORS as exc:
                logger.warning("Failed to analyze file: %s (%s)", files[idx], exc)
    return results


def collect_flags(files, config, max_workers=1):
    """Run detection over `files`; output order follows `files` whatever the worker count."""
    if max_workers > 1 and len(files) > 1:
        results = _detect_parallel(files, config, max_workers)
    else:
        results = _detect_sequential(files, config)

    references, definitions = [], []
    for idx in sorted(results):
        refs, defs = results[idx]
        references.extend(refs)
        definitions.extend(defs)
    return references, definitions


def run(root_path, config: FlagwatchConfig = None, max_workers: int = 1):
    config = config or FlagwatchConfig()
    try:
        logger.debug("Scanning files in: %s", root_path)
        logger.debug("Include patterns: %s", ", ".join(config.include))
        logger.debug("Exclude patterns: %s", ", ".join(config.exclude))

        files = scan_files(root_path, config.include, config.exclude)
        logger.debug("Found %d files to analyze", len(files))

        references, definitions = collect_flags(files, config, max_workers=max_workers)
        return analyze_flags(files, references, definitions)
    except FlagwatchError:
        raise
    except Exception as exc:
        raise InternalError(f"Internal error during analysis: {exc}") from exc


def exit_code_for(result, strict: bool) -> int:
    if strict and result.has_issues:
        return EXIT_POLICY_VIOLATION
    return EXIT_SUCCESS
