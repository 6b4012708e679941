# src/flagwatch/output.py
import json
from typing import List

from .models import AnalysisResult


class Color:
    RESET = "\033[0m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"


def colorize(text: str, color: str, enabled: bool) -> str:
    return f"{color}{text}{Color.RESET}" if enabled else text


def to_json(data, pretty=True):
    """Convert result dict into JSON string."""
    if pretty:
        return json.dumps(data, indent=2, ensure_ascii=False)
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def _details(result: AnalysisResult) -> List[str]:
    lines = ["", "Details:", ""]

    if result.flags_unused:
        lines.append("Unused flags:")
        for flag in result.flags_unused:
            lines.append(f"  - {flag.name} ({flag.file}:{flag.line})")
        lines.append("")

    if result.flags_missing:
        lines.append("Missing flags:")
        for flag in result.flags_missing:
            lines.append(f"  - {flag.name} ({flag.file}:{flag.line})")
        lines.append("")

    if result.dead_conditionals:
        lines.append("Dead conditionals:")
        for dc in result.dead_conditionals:
            kind = "always true" if dc.always_true else "always false"
            lines.append(f"  - {dc.file}:{dc.line} ({kind}) {dc.condition}")
        lines.append("")

    return lines


def format_summary(result: AnalysisResult, ci: bool = False, verbose: bool = False) -> str:
    """Human-readable report. CI mode drops emojis and colour."""
    use_color = not ci
    lines = ["Feature Flag Summary" if ci else "🚩 Feature Flag Summary", ""]

    lines.append(f"• {result.flags_detected} flags detected")
    if result.flags_unused:
        lines.append(f"• {len(result.flags_unused)} flags never enabled anywhere")
    if result.flags_missing:
        lines.append(f"• {len(result.flags_missing)} flags referenced but undefined")
    if result.always_true_count:
        lines.append(f"• {result.always_true_count} flags always true (dead conditional)")
    if result.always_false_count:
        lines.append(f"• {result.always_false_count} flags always false (dead conditional)")

    lines.append("")
    if result.has_issues:
        lines.append(colorize("Review recommended", Color.YELLOW, use_color))
    else:
        lines.append(colorize("No issues detected" if ci else "✅ No issues detected", Color.GREEN, use_color))

    if verbose:
        lines.extend(_details(result))

    return "\n".join(lines)


def format_report(result: AnalysisResult, json_mode: bool = False, ci: bool = False, verbose: bool = False) -> str:
    if json_mode:
        return to_json(result.to_dict(), pretty=True)
    return format_summary(result, ci=ci, verbose=verbose)
