from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List

from .edit import EditOperation


class EditState(str, Enum):
    DETECTED = "detected"
    WRITING = "writing"
    COMPLETE = "complete"

    @property
    def rank(self) -> int:
        return _RANKS[self]


_RANKS = {EditState.DETECTED: 0, EditState.WRITING: 1, EditState.COMPLETE: 2}


@dataclass
class ParseResult:
    """Everything one stateless parse of a buffer produced."""

    operations: List[EditOperation] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


@dataclass
class ProgressiveEditResult:
    """
    Per-call view of a streaming session.

    - detected_edits: operations whose key was seen for the first time this call
    - in_progress_edits: operations whose key is currently `writing`
    - complete_edits: every completed edit of the turn so far (deduplicated)
    - detected_files: most advanced state per file over all tracked keys
    """

    detected_edits: List[EditOperation] = field(default_factory=list)
    in_progress_edits: List[EditOperation] = field(default_factory=list)
    complete_edits: List[EditOperation] = field(default_factory=list)
    detected_files: Dict[str, EditState] = field(default_factory=dict)
    operations: List[EditOperation] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)
