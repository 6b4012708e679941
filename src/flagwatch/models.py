"""
Data models for flagwatch.
Frozen dataclasses - created per run, never mutated.
"""

from dataclasses import asdict, dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class FlagReference:
    """A site where a flag value is read."""
    name: str
    file: str
    line: int
    column: int
    pattern: str  # detection rule that produced it


@dataclass(frozen=True)
class FlagDefinition:
    """A site where a flag value is assigned (e.g. a line of a .env file)."""
    name: str
    file: str
    line: int
    column: int


@dataclass(frozen=True)
class DeadConditional:
    """A branch whose outcome is fixed."""
    file: str
    line: int
    column: int
    condition: str
    always_true: bool
    always_false: bool

    def __post_init__(self):
        if self.always_true == self.always_false:
            raise ValueError(
                f"DeadConditional at {self.file}:{self.line} must be exactly one of "
                "always_true / always_false"
            )


@dataclass(frozen=True)
class AnalysisResult:
    flags_detected: int
    flags_unused: Tuple[FlagDefinition, ...] = ()
    flags_missing: Tuple[FlagReference, ...] = ()
    dead_conditionals: Tuple[DeadConditional, ...] = ()
    all_flags: Tuple[FlagReference, ...] = ()

    @property
    def always_true_count(self) -> int:
        return sum(1 for dc in self.dead_conditionals if dc.always_true)

    @property
    def always_false_count(self) -> int:
        return sum(1 for dc in self.dead_conditionals if dc.always_false)

    @property
    def has_issues(self) -> bool:
        return bool(self.flags_unused or self.flags_missing or self.dead_conditionals)

    def to_dict(self) -> Dict:
        data = asdict(self)
        # asdict keeps tuples; JSON wants plain lists
        return {k: list(v) if isinstance(v, tuple) else v for k, v in data.items()}


DEFAULT_INCLUDE = (
    "**/*.{ts,tsx,js,jsx}",
    "**/.env",
    "**/.env.*",
)

DEFAULT_EXCLUDE = (
    "**/node_modules/**",
    "**/dist/**",
    "**/build/**",
)

DEFAULT_FLAG_PATTERNS = (
    r"process\.env\.([A-Z_]+)",
    r"featureFlags\.([a-zA-Z]+)",
    r"flags\.([a-zA-Z]+)",
    r"config\.flags\.([a-zA-Z]+)",
    r"""isEnabled\(['"]([^'"]+)['"]\)""",
)

DEFAULT_ENV_VAR_PREFIXES = ("FEATURE_", "ENABLE_")


@dataclass(frozen=True)
class FlagwatchConfig:
    """Validated settings handed to the scanner and detector."""
    include: Tuple[str, ...] = DEFAULT_INCLUDE
    exclude: Tuple[str, ...] = DEFAULT_EXCLUDE
    flag_patterns: Tuple[str, ...] = DEFAULT_FLAG_PATTERNS
    env_var_prefixes: Tuple[str, ...] = DEFAULT_ENV_VAR_PREFIXES
    strict: bool = False
