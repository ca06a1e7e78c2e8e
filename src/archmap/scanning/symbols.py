"""Symbol extraction from scrubbed source text.

Extracts, per file:
  - the declared namespace (empty = global namespace),
  - ordinary / interface / abstract type declaration counts,
  - imported qualified names (aliases discarded),
  - inheritance targets, qualified against the file's namespace,
plus two text metrics: effective lines of code and an approximate
cyclomatic complexity.

All functions expect text that already went through ``scrub``, except
``analyze_source`` which scrubs first.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from .dialects import DialectConfig
from .scrubber import scrub


@dataclass
class FileSymbols:
    """Everything extracted from one source file."""

    namespace: str = ""
    classes: int = 0
    interfaces: int = 0
    abstracts: int = 0
    imports: list[str] = field(default_factory=list)
    inheritance: list[str] = field(default_factory=list)
    loc: int = 0
    ccn: int = 1

    @property
    def total(self) -> int:
        return self.classes + self.interfaces + self.abstracts

    @property
    def references(self) -> list[str]:
        """Imports followed by inheritance targets, in source order per kind."""
        return self.imports + self.inheritance


def extract_namespace(scrubbed: str, dialect: DialectConfig) -> str:
    """Return the first declared namespace, or "" for the global namespace."""
    match = re.search(dialect.namespace_pattern, scrubbed)
    return match.group(1) if match else ""


def qualify_name(name: str, namespace: str, separator: str) -> str:
    """Qualify a bare name with ``namespace``; qualified names pass through."""
    if separator in name or not namespace:
        return name
    return f"{namespace}{separator}{name}"


def extract_symbols(scrubbed: str, dialect: DialectConfig) -> FileSymbols:
    """Extract namespace, declarations, imports and inheritance targets.

    Args:
        scrubbed: Source text with comments and strings removed
        dialect: Patterns to match with

    Returns:
        FileSymbols with ``loc`` and ``ccn`` left at their defaults
    """
    namespace = extract_namespace(scrubbed, dialect)
    sep = dialect.namespace_separator

    imports = [m.group(1) for m in re.finditer(dialect.import_pattern, scrubbed)]

    inheritance: list[str] = []
    for match in re.finditer(dialect.inheritance_pattern, scrubbed):
        for name in match.group(1).split(","):
            name = name.strip()
            if name:
                inheritance.append(qualify_name(name, namespace, sep))

    return FileSymbols(
        namespace=namespace,
        classes=_count(dialect.class_pattern, scrubbed, re.MULTILINE),
        interfaces=_count(dialect.interface_pattern, scrubbed, re.MULTILINE),
        abstracts=_count(dialect.abstract_pattern, scrubbed, re.MULTILINE),
        imports=imports,
        inheritance=inheritance,
    )


def count_effective_loc(scrubbed: str) -> int:
    """Count non-blank lines."""
    return sum(1 for line in scrubbed.splitlines() if line.strip())


def compute_cyclomatic_complexity(scrubbed: str, dialect: DialectConfig) -> int:
    """Approximate cyclomatic complexity by counting decision tokens.

    1 + control-flow keywords + short-circuit operators + conditional
    expressions. Tokens that contain the ternary character without being a
    ternary (null coalescing, nullsafe access, open/close tags) are stripped
    before the conditional expressions are counted.
    """
    ccn = 1

    for pattern in dialect.complexity_patterns:
        ccn += _count(pattern, scrubbed, re.IGNORECASE)

    for operator in dialect.complexity_operators:
        ccn += scrubbed.count(operator)

    stripped = scrubbed
    for pattern in dialect.ternary_exclusions:
        stripped = re.sub(pattern, "", stripped, flags=re.IGNORECASE)
    ccn += stripped.count(dialect.ternary_token)

    return ccn


def analyze_source(text: str, dialect: DialectConfig) -> FileSymbols:
    """Scrub ``text`` and extract symbols plus LOC/CCN in one go."""
    scrubbed = scrub(text, dialect)
    symbols = extract_symbols(scrubbed, dialect)
    symbols.loc = count_effective_loc(scrubbed)
    symbols.ccn = compute_cyclomatic_complexity(scrubbed, dialect)
    return symbols


def _count(pattern: str, text: str, flags: int = 0) -> int:
    if not pattern:
        return 0
    return sum(1 for _ in re.finditer(pattern, text, flags))
