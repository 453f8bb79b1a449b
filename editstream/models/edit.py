from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

UNKNOWN_FILE = "unknown"


class EditKind(str, Enum):
    REPLACE = "replace"
    INSERT = "insert"
    DELETE = "delete"
    UPDATE = "update"


@dataclass(frozen=True)
class LineRange:
    """1-based, inclusive."""

    start: int
    end: int


@dataclass
class EditTarget:
    """Locator the patch applier uses to find the code to change."""

    name: Optional[str] = None           # function/component/symbol identifier
    code_snippet: Optional[str] = None   # short excerpt used for matching
    line_range: Optional[LineRange] = None
    json_path: Optional[str] = None      # property path for structured-data files


@dataclass
class EditOperation:
    """One targeted code change recovered from assistant text."""

    kind: EditKind
    file_path: str
    target: EditTarget = field(default_factory=EditTarget)
    old_code: Optional[str] = None
    new_code: str = ""
    description: str = "Code update"
    confidence: int = 0

    @property
    def is_complete(self) -> bool:
        """
        Complete when both sides of the pair are present, or when the target
        can be located by name alone and the replacement is present.
        """
        if not _filled(self.new_code):
            return False
        return _filled(self.old_code) or _filled(self.target.name)

    @property
    def has_code(self) -> bool:
        return _filled(self.old_code) or _filled(self.new_code)


def _filled(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def is_edit_complete(operation: EditOperation) -> bool:
    return operation.is_complete
