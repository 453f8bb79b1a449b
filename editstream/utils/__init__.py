# editstream/utils/__init__.py
from .parsing import _try_parse_comment_header
from .pathfilter import compile_patterns, is_protected, protected_path_errors
from .text import cleanup_llm_output, extract_clean_response

__all__ = [
    "_try_parse_comment_header",
    "compile_patterns",
    "is_protected",
    "protected_path_errors",
    "cleanup_llm_output",
    "extract_clean_response",
]
