import re

from ..config import FALLBACK_RESPONSE
from ..extract.markers import FIND_MARKER_RE, REPLACE_SLOT_RE
from .parsing import PATH

_THINK_RE = re.compile(r"<think>.*?(?:</think>|\Z)", re.DOTALL)

_REPLACE_WITH = r"[*_]{0,3}Replace\s+with:[*_]{0,3}"
_FIND_CODE = r"[*_]{0,3}(?:Find|Locate)\s+(?:this\s+)?code:?[*_]{0,3}"

# "Replace with:" followed by nothing.
_EMPTY_REPLACE_RE = re.compile(rf"{_REPLACE_WITH}\s*\n\s*(?:\n|$)", re.IGNORECASE)
_TRAILING_REPLACE_RE = re.compile(rf"{_REPLACE_WITH}\s*$", re.IGNORECASE)
# A find block whose replacement never came.
_ORPHAN_FIND_RE = re.compile(
    rf"{_FIND_CODE}\s*\n\s*```[\s\S]*?```\s*\n\s*{_REPLACE_WITH}\s*(?:\n\s*$|$)",
    re.IGNORECASE,
)
# "Replace with:" followed by an explanation instead of a code block.
_PROSE_REPLACE_RE = re.compile(
    rf"{_REPLACE_WITH}\s*\n\s*(?!```)"
    r"(?:Actually|Looking|I think|I need|Let me|Here|This|The|Note|Explanation)[^\n]*",
    re.IGNORECASE,
)
_FENCE_RE = re.compile(r"(```|~~~)[\s\S]*?(?:\1|\Z)")
# A line holding nothing but a find or replace marker, emphasis included.
_MARKER_LINE_RE = re.compile(
    rf"^[ \t]*(?:{FIND_MARKER_RE.pattern}|{REPLACE_SLOT_RE.pattern})[ \t]*$",
    re.IGNORECASE | re.MULTILINE,
)
_INLINE_FIND_RE = re.compile(rf"{FIND_MARKER_RE.pattern}[ \t]*", re.IGNORECASE)
_PATH_COMMENT_RE = re.compile(
    rf"(?://|#)\s*(?:In|File|Path):\s*[`\"']?{PATH}[`\"']?[ \t]*\n?",
    re.IGNORECASE,
)
_BLANK_RUN_RE = re.compile(r"\n{3,}")
_MARKER_START_RE = re.compile(r"^(?:Replace|Find|In:)", re.IGNORECASE)

_MIN_RESPONSE_LENGTH = 20


def cleanup_llm_output(content: str) -> str:
    """
    Removes <think> blocks, including one that is still open at the end.
    """
    if not content:
        return ""
    return _THINK_RE.sub("", content)


def extract_clean_response(content: str, *, fallback: str = FALLBACK_RESPONSE) -> str:
    """
    The prose part of an assistant response, for display once its edits have
    been applied: code fences, edit markers and path comments are removed and
    so are the half-written edit stubs a truncated response leaves behind.

    Returns `fallback` when nothing meaningful remains.
    """
    clean = cleanup_llm_output(content)

    clean = _EMPTY_REPLACE_RE.sub("", clean)
    clean = _TRAILING_REPLACE_RE.sub("", clean)
    clean = _ORPHAN_FIND_RE.sub("", clean)
    clean = _PROSE_REPLACE_RE.sub("", clean)

    clean = _FENCE_RE.sub("", clean)
    clean = _MARKER_LINE_RE.sub("", clean)
    clean = _INLINE_FIND_RE.sub("", clean)
    clean = _PATH_COMMENT_RE.sub("", clean)

    clean = _BLANK_RUN_RE.sub("\n\n", clean).strip()

    if len(clean) < _MIN_RESPONSE_LENGTH or _MARKER_START_RE.match(clean):
        return fallback
    return clean
