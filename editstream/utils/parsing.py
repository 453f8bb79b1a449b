# editstream/utils/parsing.py
import re
from typing import Dict, Optional

SOURCE_EXTENSIONS = (
    "tsx", "ts", "jsx", "mjs", "cjs", "js", "mo", "json", "pyi", "py", "scss",
    "css", "html", "vue", "svelte", "md", "yaml", "yml", "toml", "rs", "go",
    "java", "kt", "rb", "php", "cpp", "hpp", "cs", "c", "h", "swift", "sh", "sql",
)

_EXT = "(?:%s)" % "|".join(SOURCE_EXTENSIONS)
PATH = rf"[\w.\-/\\@]*[\w\-]\.{_EXT}(?![\w-])"

# A comment line naming the file, either labelled or bare:
#   // In: src/App.tsx     # file: app/main.py     <!-- index.html -->
COMMENT_PATH_LINE_RE = re.compile(
    rf"^[ \t]*(?://|#|--|/\*|<!--)\s*(?:(?:In|File|Path):\s*)?[`\"']?(?P<path>{PATH})[`\"']?[\s*/\->]*$",
    re.IGNORECASE,
)
_LABELLED = re.compile(r"(?:In|File|Path):", re.IGNORECASE)


def _try_parse_comment_header(content: str) -> Optional[Dict[str, str]]:
    """
    Finds a comment line naming the file the block belongs to.

    The first line may name the file bare (`// src/App.tsx`); any other line
    must be labelled (`// In: src/App.tsx`) so ordinary comments that merely
    mention a file are left alone. Returns a dict with 'file_path' and the
    remaining 'code' (the comment line removed) if found.
    """
    lines = content.splitlines()
    if not lines:
        return None

    for i, line in enumerate(lines):
        match = COMMENT_PATH_LINE_RE.match(line)
        if not match:
            continue
        if i > 0 and not _LABELLED.search(line):
            continue
        found_path = match.group("path").replace("\\", "/")
        return {"file_path": found_path, "code": "\n".join(lines[:i] + lines[i + 1:])}
    return None
