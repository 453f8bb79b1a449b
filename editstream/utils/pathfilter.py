# editstream/utils/pathfilter.py
from functools import lru_cache
from typing import Iterable, List, Optional, Tuple

import pathspec

from ..models.edit import UNKNOWN_FILE, EditOperation


@lru_cache(maxsize=32)
def compile_patterns(patterns: Tuple[str, ...]) -> Optional[pathspec.PathSpec]:
    """
    Compile gitignore-style patterns (`.env`, `*.lock`, `node_modules/`).
    Returns None when there is nothing to match against.
    """
    lines = [p for p in patterns if p and p.strip() and not p.lstrip().startswith("#")]
    if not lines:
        return None
    return pathspec.GitIgnoreSpec.from_lines(lines)


def is_protected(file_path: str, patterns: Tuple[str, ...]) -> bool:
    spec = compile_patterns(tuple(patterns))
    if spec is None or not file_path or file_path == UNKNOWN_FILE:
        return False
    # Normalise to POSIX-style, relative paths for consistent PathSpec matching
    path = file_path.replace("\\", "/")
    while path.startswith("./"):
        path = path[2:]
    return spec.match_file(path.lstrip("/"))


def protected_path_errors(operations: Iterable[EditOperation], patterns: Tuple[str, ...]) -> List[str]:
    errors: List[str] = []
    for op in operations:
        if is_protected(op.file_path, patterns):
            msg = f"Edit targets protected path '{op.file_path}'"
            if msg not in errors:
                errors.append(msg)
    return errors
