# editstream/config.py
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple

from .errors import ConfigError

if TYPE_CHECKING:
    from .cleaner import CodeCleaner

FALLBACK_RESPONSE = "Code updates have been applied successfully."


@dataclass(frozen=True)
class ParserConfig:
    """
    Tunables shared by the extractor, the tracker and the ledger.

    All windows are measured in characters of the accumulated buffer.
    """

    context_window: int = 300          # prose scanned before a marker for path/description
    replace_lookahead: int = 500       # a "Replace with" needs a fence within this distance
    snippet_length: int = 200          # target.code_snippet length
    key_snippet_length: int = 50       # snippet prefix used in lifecycle keys
    signature_snippet_length: int = 50
    signature_code_length: int = 100   # new_code prefix used in ledger signatures
    min_block_length: int = 20         # single blocks must be longer than this
    protected_paths: Tuple[str, ...] = ()
    cleaner: Optional["CodeCleaner"] = None

    def __post_init__(self) -> None:
        for name in (
            "context_window",
            "replace_lookahead",
            "snippet_length",
            "key_snippet_length",
            "signature_snippet_length",
            "signature_code_length",
        ):
            value = getattr(self, name)
            if not isinstance(value, int) or value <= 0:
                raise ConfigError(f"{name} must be a positive integer, got {value!r}")
        if self.min_block_length < 0:
            raise ConfigError(f"min_block_length must be >= 0, got {self.min_block_length!r}")
        if isinstance(self.protected_paths, str):
            raise ConfigError("protected_paths must be a sequence of patterns, not a string")
        # Frozen dataclass: normalise through object.__setattr__.
        object.__setattr__(self, "protected_paths", tuple(self.protected_paths))

    def get_cleaner(self) -> "CodeCleaner":
        if self.cleaner is not None:
            return self.cleaner
        from .cleaner import DEFAULT_CLEANER

        return DEFAULT_CLEANER


DEFAULT_CONFIG = ParserConfig()
