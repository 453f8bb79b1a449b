# editstream/extract/metadata.py
import re
from typing import List, Optional

from ..models.edit import UNKNOWN_FILE, EditKind
from .markers import (
    ACTION_RE,
    BARE_PATH_RE,
    DECLARATION_RE,
    DELETE_WORDS_RE,
    INSERT_WORDS_RE,
    LABELLED_PATH_RE,
    NAME_STOPWORDS,
    PHRASE_PATH_RE,
    TARGET_NAME_RES,
)

DEFAULT_DESCRIPTION = "Code update"


def _normalize_path(path: str) -> str:
    return path.strip().strip("`\"'").replace("\\", "/")


def _last(pattern: "re.Pattern[str]", text: str, group: str = "path") -> Optional[str]:
    found = None
    for m in pattern.finditer(text):
        found = m.group(group)
    return found


def labelled_paths(text: str) -> List[str]:
    """Every `In:` / `File:` / `Path:` labelled path, first-seen order, no duplicates."""
    paths: List[str] = []
    for m in LABELLED_PATH_RE.finditer(text):
        path = _normalize_path(m.group("path"))
        if path not in paths:
            paths.append(path)
    return paths


def path_from_window(window: str) -> Optional[str]:
    """
    Path mentioned closest to the end of `window`: a labelled path wins over an
    "...in utils.ts" phrase.
    """
    path = _last(LABELLED_PATH_RE, window) or _last(PHRASE_PATH_RE, window)
    return _normalize_path(path) if path else None


def resolve_file_path(text: str, marker_pos: int, window: int) -> str:
    """
    File path for an edit whose marker starts at `marker_pos`.

    Looks in the `window` characters before the marker, then falls back to the
    first labelled path anywhere earlier in the buffer. Text after the marker
    is ignored so the path cannot change as later chunks stream in.
    """
    before = text[max(0, marker_pos - window):marker_pos]
    path = path_from_window(before)
    if path:
        return path
    earlier = labelled_paths(text[:marker_pos])
    return earlier[0] if earlier else UNKNOWN_FILE


def extract_description(context: str, default: str = DEFAULT_DESCRIPTION) -> str:
    """Last action-verb phrase in `context` ("I'll update ...", "Adding ...")."""
    found = None
    for m in ACTION_RE.finditer(context):
        found = m.group(0)
    return found.strip() if found else default


def infer_kind(description: str) -> EditKind:
    if INSERT_WORDS_RE.search(description):
        return EditKind.INSERT
    if DELETE_WORDS_RE.search(description):
        return EditKind.DELETE
    return EditKind.REPLACE


def name_from_description(description: str) -> Optional[str]:
    for m in TARGET_NAME_RES[0].finditer(description):
        name = m.group(1)
        if name.lower() not in NAME_STOPWORDS:
            return name
    return None


def name_from_code(code: Optional[str]) -> Optional[str]:
    """First declared symbol in a code snippet."""
    if not code:
        return None
    m = DECLARATION_RE.search(code)
    if not m:
        return None
    return next((g for g in m.groups() if g), None)


def recover_target_name(description: str, code: Optional[str]) -> Optional[str]:
    return name_from_description(description) or name_from_code(code)


# =============================
# Public helpers
# =============================

def extract_file_path(text: str) -> Optional[str]:
    """Best-effort file path in free text: labelled, then phrase, then bare."""
    for pattern in (LABELLED_PATH_RE, PHRASE_PATH_RE, BARE_PATH_RE):
        m = pattern.search(text)
        if m:
            return _normalize_path(m.group("path"))
    return None


def extract_target_name(description: str) -> Optional[str]:
    """Function/component name named in a description, e.g. "update the Foo component"."""
    for pattern in TARGET_NAME_RES:
        for m in pattern.finditer(description):
            name = m.group(1)
            if name.lower() not in NAME_STOPWORDS:
                return name
    return None


def extract_target_file(text: str) -> Optional[str]:
    """First labelled file path (`In: src/App.tsx`) in the text."""
    paths = labelled_paths(text)
    return paths[0] if paths else None
