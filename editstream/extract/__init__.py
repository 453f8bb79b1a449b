from .fences import scan_fences
from .main import (
    find_malformed_pairs,
    has_full_file_markers,
    parse_edit_descriptions,
    run_strategies,
)
from .metadata import (
    extract_description,
    extract_file_path,
    extract_target_file,
    extract_target_name,
)
from .strategies import (
    DEFAULT_STRATEGIES,
    Strategy,
    explicit_pair_strategy,
    json_update_strategy,
    naive_two_block_strategy,
    relaxed_pair_strategy,
    single_block_strategy,
)

__all__ = [
    "scan_fences",
    "parse_edit_descriptions",
    "run_strategies",
    "has_full_file_markers",
    "find_malformed_pairs",
    "extract_description",
    "extract_file_path",
    "extract_target_file",
    "extract_target_name",
    "DEFAULT_STRATEGIES",
    "Strategy",
    "explicit_pair_strategy",
    "relaxed_pair_strategy",
    "single_block_strategy",
    "naive_two_block_strategy",
    "json_update_strategy",
]
