# editstream/cleaner.py
"""
Removes narrative prose that an assistant leaked into a code fence.

Two passes:
  1. Phrase removal: known explanation openers are cut to the end of the line.
  2. Line filter: a line survives only if it is blank or a line classifier
     accepts it as code.

This is a heuristic, not a grammar. Unusual-but-valid lines (for example the
middle of a multi-line string literal written as plain prose) can be dropped.
Plug in a custom classifier to widen what is kept:

    cleaner = CodeCleaner(classifier=any_of(is_code_line, my_rule))
"""
from __future__ import annotations

import re
import textwrap
from typing import Callable, Iterable, Optional, Pattern, Sequence

LineClassifier = Callable[[str], bool]

NARRATIVE_PATTERNS: Sequence[Pattern[str]] = tuple(
    re.compile(p, flags)
    for p, flags in (
        (r"Looking at the error[^\n]*", re.IGNORECASE),
        (r"Looking at the [^\n]*file[^\n]*", re.IGNORECASE),
        (r"The issue is that[^\n]*", re.IGNORECASE),
        (r"Find this code:[^\n]*", re.IGNORECASE),
        (r"Replace with:[^\n]*", re.IGNORECASE),
        (r"Here's the fix[^\n]*", re.IGNORECASE),
        (r"Here's what[^\n]*", re.IGNORECASE),
        (r"I'll create[^\n]*", re.IGNORECASE),
        (r"I'll add[^\n]*", re.IGNORECASE),
        (r"I need to[^\n]*", re.IGNORECASE),
        (r"(?m)^[ \t]*In:\s*[^\n]+", 0),
        (r"##\s*\*\*[^\n]*", 0),
        (r"🚨\s*[^\n]*", 0),
        (r"Error Analysis[^\n]*", re.IGNORECASE),
        (r"Root cause[^\n]*", re.IGNORECASE),
        (r"Fix Required[^\n]*", re.IGNORECASE),
    )
)

# A narrative opener must be followed by whitespace or a colon, so identifiers
# such as `ErrorBoundary` or `fixture = ...` are not mistaken for prose.
# "Error"/"Fix" only count capitalised and followed by a space (`error: string;`
# is a field declaration).
_NARRATIVE_LINE_RE = re.compile(
    r"^(?:##|🚨|In:"
    r"|(?:looking|the issue|find this|replace with|here's|i'll|i need|root cause)(?=[\s:]|$)"
    r"|(?-i:Error|Fix)(?=\s))",
    re.IGNORECASE,
)

_CODE_KEYWORDS = (
    # JavaScript / TypeScript
    "import", "export", "const", "let", "var", "function", "class", "interface",
    "type", "enum", "return", "if", "else", "for", "while", "do", "switch", "case",
    "default", "try", "catch", "finally", "throw", "new", "delete", "async",
    "await", "yield", "break", "continue", "declare", "namespace", "module",
    "public", "private", "protected", "static", "readonly", "abstract",
    # Python
    "def", "from", "elif", "except", "with", "raise", "pass", "lambda",
    "global", "nonlocal", "assert", "del",
    # Motoko and friends
    "actor", "func", "shared", "query", "stable", "object", "switch", "ignore",
    "package", "use", "fn", "impl", "struct", "pub", "mut", "match",
)

_KEYWORD_RE = re.compile(r"^(?:%s)\b" % "|".join(sorted(set(_CODE_KEYWORDS), key=len, reverse=True)))
_PUNCT_START_RE = re.compile(r"^(?:<\w|</\w|<>|</>|[{}()\[\];,@]|=>|\.\.\.|\.\w|\?\.|\*|//|/\*|#(?!#)|--\s|['\"`])")
_ASSIGN_RE = re.compile(r"^[A-Za-z_$][\w$]*(?:\??\.[\w$]+|\[[^\]]*\])*\s*(?:[-+*/%|&^]|\*\*|\?\?|\|\||&&)?=(?!=)")
_ANNOTATION_RE = re.compile(r"^[A-Za-z_$][\w$]*\??\s*:")
_CALL_RE = re.compile(r"^[A-Za-z_$][\w$]*(?:\??\.[\w$]+)*\s*(?:<[^>]*>)?\(")
_CODE_END_RE = re.compile(r"[;{}(\[,]\s*$|=>\s*\{?\s*$")
_LITERAL_RE = re.compile(r"^(?:true|false|null|None|True|False|-?\d[\d_.eE+-]*)\s*,?$")


def is_code_line(line: str) -> bool:
    """Default classifier: True when a (non-blank) line has a code-like shape."""
    s = line.strip()
    if not s:
        return True
    return bool(
        _KEYWORD_RE.match(s)
        or _PUNCT_START_RE.match(s)
        or _ASSIGN_RE.match(s)
        or _ANNOTATION_RE.match(s)
        or _CALL_RE.match(s)
        or _CODE_END_RE.search(s)
        or _LITERAL_RE.match(s)
    )


def is_narrative_line(line: str) -> bool:
    return bool(_NARRATIVE_LINE_RE.match(line.strip()))


def any_of(*classifiers: LineClassifier) -> LineClassifier:
    """Compose classifiers: a line is kept if any of them keeps it."""

    def _classify(line: str) -> bool:
        return any(c(line) for c in classifiers)

    return _classify


class CodeCleaner:
    """Configurable two-pass cleaner. Instances are stateless and reusable."""

    def __init__(
        self,
        classifier: LineClassifier = is_code_line,
        patterns: Optional[Iterable[Pattern[str]]] = None,
    ):
        self.classifier = classifier
        self.patterns = tuple(NARRATIVE_PATTERNS if patterns is None else patterns)

    def remove_phrases(self, code: str) -> str:
        for pattern in self.patterns:
            code = pattern.sub("", code)
        return code

    def filter_lines(self, code: str) -> str:
        kept = []
        for line in code.split("\n"):
            if not line.strip():
                kept.append(line)
                continue
            if is_narrative_line(line):
                continue
            if self.classifier(line):
                kept.append(line)
        return "\n".join(kept)

    def clean(self, code: Optional[str]) -> str:
        if not code:
            return ""
        code = textwrap.dedent(code.replace("\r\n", "\n"))
        code = self.remove_phrases(code)
        code = self.filter_lines(code)
        return "\n".join(ln.rstrip() for ln in code.split("\n")).strip("\n")

    __call__ = clean


DEFAULT_CLEANER = CodeCleaner()


def clean_code(code: Optional[str]) -> str:
    return DEFAULT_CLEANER.clean(code)
