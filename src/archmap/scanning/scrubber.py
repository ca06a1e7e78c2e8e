"""Lexical scrubbing: blank out comments and string literals.

Naive pattern matching on source text is only safe once keywords, brackets
and ``?`` tokens hidden inside comments or strings are gone. This is a
best-effort pass, not a lexer.
"""

import re
from functools import lru_cache

from .dialects import DialectConfig

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@lru_cache(maxsize=None)
def _scrub_regex(dialect: DialectConfig) -> re.Pattern:
    # One alternation so whichever construct starts first wins:
    # "//" inside a string stays a string, a quote inside a comment stays a comment.
    comments = "|".join(dialect.comment_patterns) or r"(?!)"
    strings = "|".join(dialect.string_patterns) or r"(?!)"
    return re.compile(f"(?P<comment>{comments})|(?P<string>{strings})", re.DOTALL)


def scrub(text: str, dialect: DialectConfig) -> str:
    """Remove comments and string bodies from ``text``.

    Comments are dropped, strings become an empty pair of their opening
    quote. Line breaks inside either are kept verbatim, whatever the
    line-ending convention, so the line count of the result equals the
    line count of the input.
    """

    def _replace(match: re.Match) -> str:
        body = match.group(0)
        newlines = "".join(_LINE_BREAK.findall(body))
        if match.lastgroup == "string":
            return body[0] * 2 + newlines
        return newlines

    return _scrub_regex(dialect).sub(_replace, text)
