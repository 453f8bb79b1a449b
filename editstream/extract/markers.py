# editstream/extract/markers.py
"""Regexes for the edit markers and the prose conventions around them."""
import re

from ..utils.parsing import PATH

# Emphasis wrapped around markers: **Find this code:** or _Replace with:_
_EMPHASIS = r"[*_]{0,3}"

FIND_MARKER_RE = re.compile(
    rf"{_EMPHASIS}\b(?:Find|Locate)\s+(?:this\s+)?code\b:?{_EMPHASIS}", re.IGNORECASE
)
REPLACE_MARKER_RE = re.compile(
    rf"{_EMPHASIS}\bReplace\s+with\b:?{_EMPHASIS}", re.IGNORECASE
)
# The slot right after a find fence also accepts "Replace:" and "With:".
REPLACE_SLOT_RE = re.compile(
    rf"{_EMPHASIS}(?:Replace(?:\s+(?:it|this|that))?(?:\s+with)?|With)\b:?{_EMPHASIS}",
    re.IGNORECASE,
)

LABELLED_PATH_RE = re.compile(rf"\b(?:In|File|Path):\s*[`\"']?(?P<path>{PATH})", re.IGNORECASE)
PHRASE_PATH_RE = re.compile(rf"\bin\s+(?:the\s+)?[`\"']?(?P<path>{PATH})", re.IGNORECASE)
BARE_PATH_RE = re.compile(rf"(?<![\w/.\-])(?P<path>{PATH})")

ACTION_RE = re.compile(
    r"\b(?:I'll|I will|Updating|Update|Modifying|Modify|Adding|Add|Removing|Remove"
    r"|Changing|Change|Fixing|Fix|Here's)\s+(?:[^.\n]|\.(?=\w))+",
    re.IGNORECASE,
)

TARGET_NAME_RES = (
    re.compile(
        r"(?:the\s+)?`?([A-Za-z_$][\w$]*)`?\s+(?:function|component|method|hook|type|interface|class)\b",
        re.IGNORECASE,
    ),
    re.compile(r"\b(?:update|modify|change|add|remove)\s+`?([A-Za-z_$][\w$]*)`?", re.IGNORECASE),
)
# Words the name patterns pick up from ordinary sentences.
NAME_STOPWORDS = frozenset({
    "the", "a", "an", "this", "that", "new", "main", "existing", "following",
    "its", "their", "my", "your", "our", "same", "each", "every", "one", "to",
})

DECLARATION_RE = re.compile(
    r"(?:export\s+)?(?:default\s+)?(?:async\s+)?"
    r"(?:function\s*\*?\s*([A-Za-z_$][\w$]*)"
    r"|(?:const|let|var)\s+([A-Za-z_$][\w$]*)\s*(?::[^=\n]+)?=\s*(?:async\s+)?(?:\(|function\b|[A-Za-z_$][\w$]*\s*=>)"
    r"|class\s+([A-Za-z_$][\w$]*)"
    r"|interface\s+([A-Za-z_$][\w$]*)"
    r"|type\s+([A-Za-z_$][\w$]*)\s*="
    r"|def\s+([A-Za-z_]\w*))"
)

INSERT_WORDS_RE = re.compile(r"\b(?:add|adding|adds|insert|inserting|inserts)\b", re.IGNORECASE)
DELETE_WORDS_RE = re.compile(r"\b(?:remove|removing|removes|delete|deleting|deletes)\b", re.IGNORECASE)

FULL_FILE_MARKER_RES = (
    re.compile(r"//\s*Complete\s+file:", re.IGNORECASE),
    re.compile(r"/\*\s*Complete\s+file:", re.IGNORECASE),
    re.compile(r"<!--\s*Complete\s+file:", re.IGNORECASE),
    re.compile(r"(?m)^[ \t]*#\s*Complete\s+file:", re.IGNORECASE),
)

JSON_UPDATE_RE = re.compile(
    r"\b(?:Add|Update|Set)\s+`?(?P<prop>[\w$.\[\]\-]+)`?\s+(?:to|in)\s+`?(?P<path>[\w.\-/\\]+\.json)\b`?",
    re.IGNORECASE,
)
