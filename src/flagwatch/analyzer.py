"""
analyzer.py - cross-file reconciliation of references vs definitions,
plus the dead-conditional pass.
"""
import logging
from typing import List

from .detector import line_and_column, read_source
from .models import AnalysisResult, DeadConditional, FlagDefinition, FlagReference
from .patterns import DEAD_CONDITIONAL_RULES

logger = logging.getLogger(__name__)


def position_key(item):
    return (item.file, item.line, item.column)


def find_unused_flags(definitions, references) -> List[FlagDefinition]:
    """Definitions whose name is never referenced, in any file."""
    referenced = {ref.name for ref in references}
    return [d for d in definitions if d.name not in referenced]


def find_missing_flags(definitions, references) -> List[FlagReference]:
    """References whose name is never defined, in any file."""
    defined = {d.name for d in definitions}
    return [r for r in references if r.name not in defined]


def detect_dead_conditionals(content: str, filename: str = "<string>") -> List[DeadConditional]:
    """
    Purely lexical: `if (true)` inside a string literal or comment is
    reported as well.
    """
    found = []
    for rule, regex, truthy in DEAD_CONDITIONAL_RULES:
        for m in regex.finditer(content):
            if rule.startswith("const_"):
                # point at the declaration, not the if
                condition = f"const {m.group(1)} = {m.group(2)}"
            else:
                condition = m.group(0)
            line, column = line_and_column(content, m.start())
            found.append(DeadConditional(
                file=filename,
                line=line,
                column=column,
                condition=condition,
                always_true=truthy,
                always_false=not truthy,
            ))
    return found


def analyze_flags(files, references, definitions) -> AnalysisResult:
    refs = sorted(references, key=position_key)
    defs = sorted(definitions, key=position_key)

    dead = []
    for path in files:
        try:
            content = read_source(path)
        except (OSError, ValueError) as exc:
            logger.debug("Skipping dead-conditional pass for %s: %s", path, exc)
            continue
        dead.extend(detect_dead_conditionals(content, filename=str(path)))

    return AnalysisResult(
        flags_detected=len({r.name for r in refs}),
        flags_unused=tuple(find_unused_flags(defs, refs)),
        flags_missing=tuple(find_missing_flags(defs, refs)),
        dead_conditionals=tuple(dead),
        all_flags=tuple(refs),
    )
