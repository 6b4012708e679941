# src/flagwatch/glob_matcher.py
"""
Glob -> regex compiler used by the file scanner.

Supported syntax: `**` (any run of characters, separators included),
`*` (any run inside one path segment) and `{a,b}` brace alternation.
Everything else is literal. Compilation never raises: an unterminated
or empty brace group is plain text and an empty pattern only matches "".
"""
import re
from functools import lru_cache
from typing import Callable, Iterable

BRACE_RE = re.compile(r"\{([^}]+)\}")


def _wildcards(text: str) -> str:
    # split on ** first so the single-star split never sees half of one
    return ".*".join(
        "[^/]*".join(re.escape(piece) for piece in chunk.split("*"))
        for chunk in text.split("**")
    )


def _segment_to_regex(segment: str) -> str:
    if segment == "**":
        return ".*"

    out = []
    pos = 0
    for m in BRACE_RE.finditer(segment):
        out.append(_wildcards(segment[pos:m.start()]))
        alternatives = [re.escape(alt.strip()) for alt in m.group(1).split(",")]
        out.append("(?:" + "|".join(alternatives) + ")")
        pos = m.end()
    out.append(_wildcards(segment[pos:]))
    return "".join(out)


@lru_cache(maxsize=256)
def glob_to_regex(pattern: str) -> "re.Pattern":
    body = "/".join(_segment_to_regex(seg) for seg in pattern.split("/"))
    return re.compile(f"^{body}$")


def normalize_path(path) -> str:
    return str(path).replace("\\", "/")


def compile_matcher(pattern: str) -> Callable[[str], bool]:
    """Return a predicate telling whether a path matches `pattern`."""
    regex = glob_to_regex(pattern)

    def matcher(path) -> bool:
        return regex.match(normalize_path(path)) is not None

    return matcher


def matches_glob(path, pattern: str) -> bool:
    return compile_matcher(pattern)(path)


def matches_any(path, patterns: Iterable[str]) -> bool:
    return any(matches_glob(path, p) for p in patterns)
