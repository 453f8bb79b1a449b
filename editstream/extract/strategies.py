# editstream/extract/strategies.py
"""
Extraction strategies, one function per convention an assistant may follow.

Contract shared by every strategy:

    strategy(text: str, config: ParserConfig) -> list[EditOperation]

`text` is the whole accumulated buffer. A strategy returns zero or more
candidate operations and has no side effects. `DEFAULT_STRATEGIES` lists them
in priority order; the extractor stops at the first one that returns anything.

A fence whose closer has not streamed in yet never supplies `new_code`, so an
operation cannot be reported complete while its replacement is still growing.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Set

from ..config import ParserConfig
from ..models.edit import UNKNOWN_FILE, EditKind, EditOperation, EditTarget
from ..models.fence import CodeFence
from ..utils.parsing import _try_parse_comment_header
from .fences import fence_after, fence_hint, inside_fence, scan_fences
from .markers import (
    FIND_MARKER_RE,
    JSON_UPDATE_RE,
    LABELLED_PATH_RE,
    REPLACE_MARKER_RE,
    REPLACE_SLOT_RE,
)
from .metadata import (
    DEFAULT_DESCRIPTION,
    extract_description,
    infer_kind,
    labelled_paths,
    name_from_code,
    recover_target_name,
    resolve_file_path,
)

StrategyFunc = Callable[[str, ParserConfig], List[EditOperation]]

EXPLICIT_PAIR_CONFIDENCE = 80
RELAXED_PAIR_CONFIDENCE = 75
NAMED_BLOCK_CONFIDENCE = 70
UNNAMED_BLOCK_CONFIDENCE = 50
NAIVE_PAIR_CONFIDENCE = 60
JSON_UPDATE_CONFIDENCE = 70

_GAP_CHARS = " \t\r\n*_:"


@dataclass(frozen=True)
class Strategy:
    name: str
    func: StrategyFunc

    def __call__(self, text: str, config: ParserConfig) -> List[EditOperation]:
        return self.func(text, config)


# =============================
# Helpers
# =============================

def _markers(pattern: "re.Pattern[str]", text: str, fences: List[CodeFence], pos: int = 0) -> Iterator["re.Match[str]"]:
    """Marker matches that are prose, not text quoted inside a fence."""
    for m in pattern.finditer(text, pos):
        if not inside_fence(fences, m.start()):
            yield m


def _only_gap(text: str, start: int, end: int) -> bool:
    return not text[start:end].strip(_GAP_CHARS)


def _skip_ws(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in " \t\r\n":
        pos += 1
    return pos


def _pending_fence(rest: str) -> bool:
    """True if `rest` is only the start of a fence whose opener line is still streaming."""
    s = rest.lstrip(_GAP_CHARS)
    if not s or "\n" in s:
        return False
    return s.startswith(("```", "~~~")) or s in ("`", "``", "~", "~~")


def _find_fence_starts(text: str, fences: List[CodeFence]) -> Set[int]:
    """Openers of fences that hold the code to look for (right after a find marker)."""
    starts = set()
    for m in _markers(FIND_MARKER_RE, text, fences):
        fence = fence_after(fences, m.end())
        if fence is not None and _only_gap(text, m.end(), fence.start):
            starts.add(fence.start)
    return starts


def _last_labelled(window: str) -> Optional[str]:
    found = None
    for m in LABELLED_PATH_RE.finditer(window):
        found = m.group("path")
    return found.strip("`\"'").replace("\\", "/") if found else None


def _strip_path_comment(code: str) -> tuple[str, Optional[str]]:
    header = _try_parse_comment_header(code)
    if header:
        return header["code"].strip("\n"), header["file_path"]
    return code, None


def _pair_operation(
    text: str,
    marker_pos: int,
    old_raw: str,
    new_raw: str,
    confidence: int,
    config: ParserConfig,
) -> EditOperation:
    cleaner = config.get_cleaner()
    old_code, old_hint = _strip_path_comment(cleaner.clean(old_raw))
    new_code, new_hint = _strip_path_comment(cleaner.clean(new_raw))

    file_path = resolve_file_path(text, marker_pos, config.context_window)
    if file_path == UNKNOWN_FILE:
        file_path = old_hint or new_hint or UNKNOWN_FILE

    context = text[max(0, marker_pos - config.context_window):marker_pos]
    description = extract_description(context)
    target = EditTarget(
        name=recover_target_name(description, old_code),
        code_snippet=old_code[:config.snippet_length] or None,
    )
    return EditOperation(
        kind=infer_kind(description),
        file_path=file_path,
        target=target,
        old_code=old_code,
        new_code=new_code,
        description=description,
        confidence=confidence,
    )


# =============================
# Strategies
# =============================

def explicit_pair_strategy(text: str, config: ParserConfig) -> List[EditOperation]:
    """
    "Find this code:" + fence, immediately followed by "Replace with:" + fence.

    Only whitespace or emphasis may separate the parts. The replacement fence
    may still be streaming (or not started yet); the pair is then reported
    with an empty `new_code`.
    """
    fences = scan_fences(text)
    operations: List[EditOperation] = []

    for m in _markers(FIND_MARKER_RE, text, fences):
        find_fence = fence_after(fences, m.end())
        if find_fence is None or not find_fence.closed or not _only_gap(text, m.end(), find_fence.start):
            continue

        slot = REPLACE_SLOT_RE.match(text, _skip_ws(text, find_fence.end))
        if not slot:
            continue

        new_raw = ""
        replace_fence = fence_after(fences, slot.end())
        if replace_fence is not None and _only_gap(text, slot.end(), replace_fence.start):
            if replace_fence.closed:
                new_raw = replace_fence.body
        elif text[slot.end():].strip(_GAP_CHARS) and not _pending_fence(text[slot.end():]):
            # Prose after the marker: not the strict form.
            continue

        operations.append(
            _pair_operation(text, m.start(), find_fence.body, new_raw, EXPLICIT_PAIR_CONFIDENCE, config)
        )

    return operations


def relaxed_pair_strategy(text: str, config: ParserConfig) -> List[EditOperation]:
    """
    Find and replace markers located independently; each is paired with the
    nearest fence after it, so narrative text may sit in between. Fences are
    consumed once, pairs never share a fence.
    """
    fences = scan_fences(text)
    operations: List[EditOperation] = []
    consumed = 0

    for m in _markers(FIND_MARKER_RE, text, fences):
        if m.start() < consumed:
            continue
        find_fence = fence_after(fences, m.end())
        if find_fence is None or not find_fence.closed:
            continue
        consumed = find_fence.end

        next_find = next(_markers(FIND_MARKER_RE, text, fences, find_fence.end), None)
        limit = next_find.start() if next_find else len(text)

        new_raw = ""
        replace = next(_markers(REPLACE_MARKER_RE, text, fences, find_fence.end), None)
        if replace is not None and replace.start() < limit:
            replace_fence = fence_after(fences, replace.end())
            if replace_fence is not None and replace_fence.start < limit:
                consumed = replace_fence.end
                if replace_fence.closed:
                    new_raw = replace_fence.body

        operations.append(
            _pair_operation(text, m.start(), find_fence.body, new_raw, RELAXED_PAIR_CONFIDENCE, config)
        )

    return operations


def single_block_strategy(text: str, config: ParserConfig) -> List[EditOperation]:
    """
    Each closed fence is a replacement on its own; `old_code` stays unset and the
    patch applier locates the original by `target.name`. A block needs a file
    path (from a `file=` hint, a path comment inside it, the last labelled path
    just before it, or the first labelled path earlier in the buffer) and more
    than `min_block_length` characters. Text after a closed block never feeds
    its path, so the edit key stays put while later chunks arrive.
    """
    fences = scan_fences(text)
    find_starts = _find_fence_starts(text, fences)
    cleaner = config.get_cleaner()
    window = config.context_window
    operations: List[EditOperation] = []

    for fence in fences:
        if not fence.closed or fence.start in find_starts:
            continue
        raw = fence.body.strip()
        if len(raw) <= config.min_block_length:
            continue

        code, comment_path = _strip_path_comment(raw)
        before = text[max(0, fence.start - window):fence.start]
        earlier = labelled_paths(text[:fence.start])
        file_path = (
            fence_hint(fence)
            or comment_path
            or _last_labelled(before)
            or (earlier[0] if earlier else UNKNOWN_FILE)
        )
        if file_path == UNKNOWN_FILE:
            continue

        new_code = cleaner.clean(code)
        if not new_code:
            continue

        name = name_from_code(new_code)
        default = f"Update {name}" if name else DEFAULT_DESCRIPTION
        description = extract_description(before, default=default)
        operations.append(EditOperation(
            kind=EditKind.REPLACE,
            file_path=file_path,
            target=EditTarget(name=name, code_snippet=new_code[:config.snippet_length]),
            old_code=None,
            new_code=new_code,
            description=description,
            confidence=NAMED_BLOCK_CONFIDENCE if name else UNNAMED_BLOCK_CONFIDENCE,
        ))

    return operations


def naive_two_block_strategy(text: str, config: ParserConfig) -> List[EditOperation]:
    """Last resort: no markers at all, first fence is the old code, second the new."""
    if FIND_MARKER_RE.search(text) or REPLACE_MARKER_RE.search(text):
        return []
    closed = [f for f in scan_fences(text) if f.closed]
    if len(closed) < 2:
        return []

    cleaner = config.get_cleaner()
    old_code = cleaner.clean(closed[0].body)
    new_code = cleaner.clean(closed[1].body)
    paths = labelled_paths(text[:closed[1].start])
    return [EditOperation(
        kind=EditKind.REPLACE,
        file_path=paths[0] if paths else UNKNOWN_FILE,
        target=EditTarget(code_snippet=old_code[:config.snippet_length] or None),
        old_code=old_code,
        new_code=new_code,
        description=DEFAULT_DESCRIPTION,
        confidence=NAIVE_PAIR_CONFIDENCE,
    )]


def json_update_strategy(text: str, config: ParserConfig) -> List[EditOperation]:
    """"Update <property> in <file>.json" followed by a ```json fence."""
    fences = scan_fences(text)
    cleaner = config.get_cleaner()
    operations: List[EditOperation] = []

    for m in _markers(JSON_UPDATE_RE, text, fences):
        fence = next(
            (f for f in fences if f.start >= m.end() and f.language in ("json", "jsonc")),
            None,
        )
        if fence is None or not fence.closed:
            continue
        prop = m.group("prop")
        path = m.group("path").replace("\\", "/")
        operations.append(EditOperation(
            kind=EditKind.UPDATE,
            file_path=path,
            target=EditTarget(json_path=prop),
            new_code=cleaner.clean(fence.body),
            description=f"Update {prop} in {path}",
            confidence=JSON_UPDATE_CONFIDENCE,
        ))

    return operations


DEFAULT_STRATEGIES = (
    Strategy("explicit_pair", explicit_pair_strategy),
    Strategy("relaxed_pair", relaxed_pair_strategy),
    Strategy("single_block", single_block_strategy),
    Strategy("naive_two_block", naive_two_block_strategy),
    Strategy("json_update", json_update_strategy),
)
