"""
flagwatch - static feature-flag analysis.

Scans a source tree, cross-references flag reads against flag definitions
and reports dead conditionals:

    from flagwatch import load_config, run

    result = run("path/to/repo", load_config())
    print(result.flags_detected, result.flags_missing)
"""

__version__ = "0.1.0"

from .analyzer import analyze_flags, detect_dead_conditionals
from .config_loader import load_config
from .detector import detect_definitions, detect_references
from .errors import ConfigurationError, FileScanError, FlagwatchError, InternalError, ParseError
from .file_scanner import scan_files
from .glob_matcher import compile_matcher, matches_any, matches_glob
from .models import AnalysisResult, DeadConditional, FlagDefinition, FlagReference, FlagwatchConfig
from .runner import exit_code_for, run

__all__ = [
    "AnalysisResult",
    "ConfigurationError",
    "DeadConditional",
    "FileScanError",
    "FlagDefinition",
    "FlagReference",
    "FlagwatchConfig",
    "FlagwatchError",
    "InternalError",
    "ParseError",
    "analyze_flags",
    "compile_matcher",
    "detect_dead_conditionals",
    "detect_definitions",
    "detect_references",
    "exit_code_for",
    "load_config",
    "matches_any",
    "matches_glob",
    "run",
    "scan_files",
]
