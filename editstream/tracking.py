# editstream/tracking.py
"""
Lifecycle tracking for edits that are re-discovered on every parse.

Two identities are used:

- the *edit key* (`edit_key`) follows one logical edit through
  detected -> writing -> complete while its text is still arriving;
- the *content signature* (`content_signature`) deduplicates completed edits,
  so two strategies that converge on the same final edit are recorded once.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .config import DEFAULT_CONFIG, ParserConfig
from .models.edit import UNKNOWN_FILE, EditOperation
from .models.result import EditState

EditCallback = Callable[[EditOperation, str], None]

_WS_RE = re.compile(r"\s+")


def _locator(op: EditOperation, snippet_length: int) -> str:
    target = op.target
    if target.name:
        return target.name
    if target.code_snippet:
        return target.code_snippet[:snippet_length]
    return target.json_path or "unknown"


def edit_key(op: EditOperation, config: ParserConfig = DEFAULT_CONFIG) -> str:
    return f"{op.file_path}:{_locator(op, config.key_snippet_length)}"


def content_signature(op: EditOperation, config: ParserConfig = DEFAULT_CONFIG) -> str:
    new_prefix = _WS_RE.sub("", (op.new_code or "")[:config.signature_code_length])
    return f"{op.file_path}::{_locator(op, config.signature_snippet_length)}::{new_prefix}"


class CompletedEditLedger:
    """Append-only record of the completed edits of one turn."""

    def __init__(self, config: ParserConfig = DEFAULT_CONFIG):
        self._config = config
        self._entries: List[EditOperation] = []
        self._signatures: set[str] = set()

    def add(self, op: EditOperation) -> bool:
        """Record `op` unless an entry with the same signature exists. Returns True if added."""
        sig = content_signature(op, self._config)
        if sig in self._signatures:
            return False
        self._signatures.add(sig)
        self._entries.append(op)
        return True

    def merged_with(self, operations: List[EditOperation]) -> List[EditOperation]:
        """Ledger history plus `operations`, deduplicated by signature, history first."""
        seen: set[str] = set()
        merged: List[EditOperation] = []
        for op in [*self._entries, *operations]:
            sig = content_signature(op, self._config)
            if sig not in seen:
                seen.add(sig)
                merged.append(op)
        return merged

    @property
    def operations(self) -> List[EditOperation]:
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()
        self._signatures.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, op: object) -> bool:
        return isinstance(op, EditOperation) and content_signature(op, self._config) in self._signatures


@dataclass
class TrackedEdit:
    key: str
    file_path: str
    state: EditState
    operation: EditOperation


@dataclass
class Transitions:
    """What one `EditStateTracker.observe` pass changed."""

    detected: List[EditOperation] = field(default_factory=list)
    writing: List[EditOperation] = field(default_factory=list)
    completed: List[EditOperation] = field(default_factory=list)


class EditStateTracker:
    """
    Owns the key -> state map of one turn.

    A key is `detected` on first sight, `writing` once one side of the pair has
    code, and `complete` once the completion rule holds. `complete` is terminal:
    later parses can never move a key back.
    """

    def __init__(self, config: ParserConfig = DEFAULT_CONFIG, ledger: Optional[CompletedEditLedger] = None):
        self._config = config
        self._edits: Dict[str, TrackedEdit] = {}
        self.ledger = ledger if ledger is not None else CompletedEditLedger(config)

    def state_of(self, key: str) -> Optional[EditState]:
        tracked = self._edits.get(key)
        return tracked.state if tracked else None

    def observe(
        self,
        operations: List[EditOperation],
        *,
        on_edit_detected: Optional[EditCallback] = None,
        on_edit_complete: Optional[EditCallback] = None,
    ) -> Transitions:
        out = Transitions()
        for op in operations:
            key = edit_key(op, self._config)
            tracked = self._edits.get(key)
            if tracked is None:
                tracked = TrackedEdit(key, op.file_path, EditState.DETECTED, op)
                self._edits[key] = tracked
                out.detected.append(op)
                if on_edit_detected:
                    on_edit_detected(op, op.file_path)

            if tracked.state is EditState.COMPLETE:
                continue

            tracked.operation = op
            if op.is_complete:
                tracked.state = EditState.COMPLETE
                self.ledger.add(op)
                out.completed.append(op)
                if on_edit_complete:
                    on_edit_complete(op, op.file_path)
            elif op.has_code:
                tracked.state = EditState.WRITING
                out.writing.append(op)
        return out

    def file_states(self) -> Dict[str, EditState]:
        """Most advanced state per file over every key seen this turn."""
        states: Dict[str, EditState] = {}
        for tracked in self._edits.values():
            current = states.get(tracked.file_path)
            if current is None or tracked.state.rank > current.rank:
                states[tracked.file_path] = tracked.state
        return states

    def detected_files(self) -> List[str]:
        files: List[str] = []
        for tracked in self._edits.values():
            if tracked.file_path and tracked.file_path != UNKNOWN_FILE and tracked.file_path not in files:
                files.append(tracked.file_path)
        return files

    def first_detected_file(self) -> Optional[str]:
        files = self.detected_files()
        return files[0] if files else None

    def clear(self) -> None:
        self._edits.clear()
        self.ledger.clear()

    def __len__(self) -> int:
        return len(self._edits)
