# editstream/extract/fences.py

from __future__ import annotations

import re
from typing import List, Optional

from ..models.fence import CodeFence

# An opener is a run of 3+ backticks or tildes, an optional info string, and a
# newline. The newline matters while streaming: "```ts" without it may still
# grow into a longer info string.
_OPENER_RE = re.compile(r"(?P<fence>`{3,}|~{3,})(?P<info>[^\n`~]*)\r?\n")


def _find_closer(text: str, char: str, length: int, pos: int) -> Optional[int]:
    """
    Return the index of the closing run for an opener of `length` x `char`,
    scanning from `pos`. A closer is a run of the same char, at least as long,
    with only whitespace after it on its line. Returns None if not (yet) present.
    """
    run_re = re.compile(re.escape(char) + "{%d,}" % length)
    for m in run_re.finditer(text, pos):
        line_end = text.find("\n", m.end())
        if line_end == -1:
            line_end = len(text)
        if not text[m.end():line_end].strip():
            return m.start()
    return None


def scan_fences(text: str) -> List[CodeFence]:
    """
    Return every top-level fenced block in order of appearance.

    A block whose closer has not arrived yet is returned with `closed=False`
    and a body running to the end of the buffer; scanning stops there.
    """
    fences: List[CodeFence] = []
    cursor = 0
    while cursor < len(text):
        m = _OPENER_RE.search(text, cursor)
        if not m:
            break

        run = m.group("fence")
        info = m.group("info").strip()
        parts = info.split()
        language = parts[0].lower() if parts and "=" not in parts[0] else ""
        body_start = m.end()

        close_at = _find_closer(text, run[0], len(run), body_start)
        if close_at is None:
            fences.append(CodeFence(
                start=m.start(), end=len(text),
                body_start=body_start, body_end=len(text),
                char=run[0], length=len(run), info=info, language=language,
                body=text[body_start:], closed=False,
            ))
            break

        close_end = close_at
        while close_end < len(text) and text[close_end] == run[0]:
            close_end += 1
        fences.append(CodeFence(
            start=m.start(), end=close_end,
            body_start=body_start, body_end=close_at,
            char=run[0], length=len(run), info=info, language=language,
            body=text[body_start:close_at], closed=True,
        ))
        cursor = close_end

    return fences


def fence_after(fences: List[CodeFence], pos: int) -> Optional[CodeFence]:
    """First fence whose opener starts at or after `pos`."""
    for fence in fences:
        if fence.start >= pos:
            return fence
    return None


def inside_fence(fences: List[CodeFence], pos: int) -> bool:
    return any(f.start <= pos < f.end for f in fences)


def fence_hint(fence: CodeFence) -> str:
    """`file=path` hint from the info string, e.g. ```ts file=src/app.ts"""
    for part in fence.info.split():
        if part.startswith("file="):
            return part.split("=", 1)[1].strip("'\"")
    return ""
