import re

# Source-text markers of a pattern that reads environment variables.
# Names found by such a pattern must carry one of the configured prefixes.
ENV_ACCESS_MARKERS = (
    r"process\.env",
    "process.env",
    r"os\.environ",
    "os.environ",
    "getenv",
)

# UPPER_SNAKE = ... ; group 1 is the variable name
DEFINITION_PATTERNS = {
    # anywhere after line start or whitespace
    "assignment": re.compile(r"(?:^|\s)([A-Z_][A-Z0-9_]*)\s*=", re.MULTILINE),
    # dotenv style, first column only
    "dotenv": re.compile(r"^([A-Z_][A-Z0-9_]*)\s*=", re.MULTILINE),
}

TRUTHY_LITERAL = r"""true|1|"true"|'true'"""
FALSY_LITERAL = r"""false|0|"false"|'false'"""

# Evaluated in this order; every match is a finding, overlaps included.
# A const rule needs the literal to end the statement (";" or end of line).
DEAD_CONDITIONAL_RULES = (
    ("literal_true", re.compile(r"if\s*\(\s*(" + TRUTHY_LITERAL + r")\s*\)"), True),
    ("literal_false", re.compile(r"if\s*\(\s*(" + FALSY_LITERAL + r"|null|undefined)\s*\)"), False),
    (
        "const_true",
        re.compile(
            r"const\s+([A-Z_][A-Z0-9_]*)\s*=\s*(" + TRUTHY_LITERAL + r")(?!\w)[ \t]*(?:;|\r?$)[\s\S]*?if\s*\(\s*\1\s*\)",
            re.MULTILINE,
        ),
        True,
    ),
    (
        "const_false",
        re.compile(
            r"const\s+([A-Z_][A-Z0-9_]*)\s*=\s*(" + FALSY_LITERAL + r")(?!\w)[ \t]*(?:;|\r?$)[\s\S]*?if\s*\(\s*\1\s*\)",
            re.MULTILINE,
        ),
        False,
    ),
)


def targets_env(pattern_source: str) -> bool:
    return any(marker in pattern_source for marker in ENV_ACCESS_MARKERS)
