"""
detector.py - lexical extraction of flag references and definitions from one file
"""
import re
from typing import Iterable, List

from .errors import ParseError
from .models import FlagDefinition, FlagReference
from .patterns import DEFINITION_PATTERNS, targets_env


def has_flag_prefix(name, prefixes):
    return any(name.startswith(p) for p in prefixes)


def line_and_column(content: str, index: int):
    """1-based (line, column) of a character offset."""
    line = content.count("\n", 0, index) + 1
    column = index - content.rfind("\n", 0, index)
    return line, column


def compile_flag_pattern(pattern: str, filename: str) -> "re.Pattern":
    try:
        regex = re.compile(pattern)
    except re.error as exc:
        raise ParseError(
            f"Failed to parse pattern {pattern!r} in {filename}: {exc}",
            filename,
            pattern=pattern,
        ) from exc
    if regex.groups < 1:
        raise ParseError(
            f"Pattern {pattern!r} has no capturing group for the flag name ({filename})",
            filename,
            pattern=pattern,
        )
    return regex


def detect_references(
    content: str,
    patterns: Iterable[str],
    env_prefixes: Iterable[str],
    filename: str = "<string>",
) -> List[FlagReference]:
    """
    Apply every pattern to `content`; group 1 of each match is a flag name.
    Patterns are independent, so one substring may yield several references.
    """
    env_prefixes = tuple(env_prefixes)
    references = []

    for pattern in patterns:
        regex = compile_flag_pattern(pattern, filename)
        env_only = targets_env(pattern)

        for m in regex.finditer(content):
            name = m.group(1)
            if not name:
                continue
            if env_only and not has_flag_prefix(name, env_prefixes):
                continue
            line, column = line_and_column(content, m.start())
            references.append(FlagReference(name, filename, line, column, pattern))

    return references


def detect_definitions(
    content: str,
    env_prefixes: Iterable[str],
    filename: str = "<string>",
) -> List[FlagDefinition]:
    """
    Find `PREFIXED_NAME =` assignments. Both definition passes usually agree
    on line-start assignments; duplicates collapse to the first one seen.
    """
    env_prefixes = tuple(env_prefixes)
    seen = set()
    definitions = []

    for regex in DEFINITION_PATTERNS.values():
        for m in regex.finditer(content):
            name = m.group(1)
            if not name or not has_flag_prefix(name, env_prefixes):
                continue
            line, column = line_and_column(content, m.start(1))
            definition = FlagDefinition(name, filename, line, column)
            if definition in seen:
                continue
            seen.add(definition)
            definitions.append(definition)

    return definitions


def read_source(path) -> str:
    with open(path, "r", encoding="utf-8") as fh:
        return fh.read()


def detect_flags_in_file(path, patterns, env_prefixes) -> List[FlagReference]:
    return detect_references(read_source(path), patterns, env_prefixes, filename=str(path))


def detect_definitions_in_file(path, env_prefixes) -> List[FlagDefinition]:
    return detect_definitions(read_source(path), env_prefixes, filename=str(path))
