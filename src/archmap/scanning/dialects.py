"""Dialect configurations: the single source of truth for lexical patterns.

The extractor does not parse; it matches a narrow grammar subset:
  - a namespace declaration,
  - a declaration keyword at the start of a logical line followed by an identifier,
  - qualified-name import statements,
  - extends/implements clauses.

Adding a new dialect:
  1. Add a DialectConfig entry to DIALECTS below.
  2. Select it with the ``dialect`` setting.
"""

from dataclasses import dataclass

from ..exceptions import UnsupportedDialectError


@dataclass(frozen=True)
class DialectConfig:
    """Everything the scrubber and the extractor need to know about a dialect."""

    name: str
    extensions: tuple[str, ...]

    # Separator between namespace segments (``\`` in ``App\Domain``).
    namespace_separator: str

    # Removed entirely; newlines inside are kept so line numbers survive.
    comment_patterns: tuple[str, ...] = ()

    # Replaced by an empty pair of the opening quote character.
    string_patterns: tuple[str, ...] = ()

    # Group 1 is the declared namespace.
    namespace_pattern: str = ""

    # Declaration patterns, matched line-anchored (re.MULTILINE).
    class_pattern: str = ""
    interface_pattern: str = ""
    abstract_pattern: str = ""

    # Group 1 is the imported qualified name.
    import_pattern: str = ""

    # Group 1 is a comma-separated list of parent names.
    inheritance_pattern: str = ""

    # Each match adds 1 to cyclomatic complexity (case-insensitive).
    complexity_patterns: tuple[str, ...] = ()

    # Literal operators; each occurrence adds 1.
    complexity_operators: tuple[str, ...] = ()

    # Conditional-expression token, and the look-alikes stripped before counting it.
    ternary_token: str = "?"
    ternary_exclusions: tuple[str, ...] = ()

    # Source roots tried when guessing a directory from a namespace.
    conventional_roots: tuple[str, ...] = ()


PHP = DialectConfig(
    name="php",
    extensions=(".php",),
    namespace_separator="\\",
    comment_patterns=(
        r"/\*.*?(?:\*/|\Z)",  # unterminated block comment runs to end of text
        r"//[^\r\n]*",
        r"#[^\r\n]*",
    ),
    string_patterns=(
        r"'(?:\\.|[^'\\])*'",
        r'"(?:\\.|[^"\\])*"',
    ),
    namespace_pattern=r"\bnamespace\s+([\w\\]+)\s*[;{]",
    class_pattern=r"^\s*class\s+\w+",
    interface_pattern=r"^\s*interface\s+\w+",
    abstract_pattern=r"^\s*abstract\s+class\s+\w+",
    import_pattern=r"\buse\s+([\w\\]+)(?:\s+as\s+\w+)?\s*;",
    inheritance_pattern=r"\b(?:extends|implements)\s+([\w\\]+(?:\s*,\s*[\w\\]+)*)",
    complexity_patterns=(
        r"\bif\s*\(",
        r"\belseif\s*\(",
        r"\bfor\s*\(",
        r"\bforeach\s*\(",
        r"\bwhile\s*\(",
        r"\bcase\b",
        r"\bcatch\s*\(",
    ),
    complexity_operators=("&&", "||"),
    ternary_token="?",
    ternary_exclusions=(
        r"\?\?",  # null coalescing
        r"\?->",  # nullsafe access
        r"<\?php",  # open tag
        r"\?>",  # close tag
    ),
    conventional_roots=("src", "lib", "app"),
)


DIALECTS: dict[str, DialectConfig] = {
    PHP.name: PHP,
}


def get_dialect(name: str) -> DialectConfig:
    """Look up a dialect by name (case-insensitive)."""
    try:
        return DIALECTS[name.lower()]
    except KeyError:
        raise UnsupportedDialectError(name, sorted(DIALECTS))
