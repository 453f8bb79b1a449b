from .cleaner import CodeCleaner, any_of, clean_code, is_code_line, is_narrative_line
from .config import DEFAULT_CONFIG, FALLBACK_RESPONSE, ParserConfig
from .session import Session
from .tracking import CompletedEditLedger, EditStateTracker, content_signature, edit_key
from .utils.text import extract_clean_response
from .errors import ConfigError, ExtractError
from .extract import (
    DEFAULT_STRATEGIES,
    Strategy,
    extract_file_path,
    extract_target_file,
    extract_target_name,
    has_full_file_markers,
    parse_edit_descriptions,
)
from .models.edit import (
    UNKNOWN_FILE,
    EditKind,
    EditOperation,
    EditTarget,
    LineRange,
    is_edit_complete,
)
from .models.result import EditState, ParseResult, ProgressiveEditResult

__all__ = [
    "Session",
    "parse_edit_descriptions",
    "extract_clean_response",
    "has_full_file_markers",
    "extract_file_path",
    "extract_target_name",
    "extract_target_file",
    "is_edit_complete",
    "edit_key",
    "content_signature",
    "EditStateTracker",
    "CompletedEditLedger",
    "CodeCleaner",
    "clean_code",
    "is_code_line",
    "is_narrative_line",
    "any_of",
    "ParserConfig",
    "DEFAULT_CONFIG",
    "FALLBACK_RESPONSE",
    "DEFAULT_STRATEGIES",
    "Strategy",
    "EditKind",
    "EditOperation",
    "EditTarget",
    "LineRange",
    "UNKNOWN_FILE",
    "EditState",
    "ParseResult",
    "ProgressiveEditResult",
    "ConfigError",
    "ExtractError",
]
