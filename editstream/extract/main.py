from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Union

from .._logging import NoopLogger, resolve_logger
from ..config import DEFAULT_CONFIG, ParserConfig
from ..errors import ExtractError
from ..models.edit import EditOperation
from ..models.result import ParseResult
from ..utils.pathfilter import protected_path_errors
from .fences import inside_fence, scan_fences
from .markers import FULL_FILE_MARKER_RES, REPLACE_MARKER_RE
from .strategies import DEFAULT_STRATEGIES, Strategy, StrategyFunc

FULL_FILE_ERROR = "Full file markers detected - targeted edits required"
MALFORMED_PAIR_ERROR = (
    'AI provided "Replace with:" markers but no code blocks - response format is invalid'
)
PARSE_FAILURE_PREFIX = "Failed to parse edit descriptions: "


def has_full_file_markers(text: str) -> bool:
    """True if the text contains a "Complete file: ..." marker in any comment style."""
    return any(pattern.search(text) for pattern in FULL_FILE_MARKER_RES)


def find_malformed_pairs(text: str, lookahead: int, *, streaming: bool = False) -> List[int]:
    """
    Offsets of "Replace with" markers that have no fence opener within
    `lookahead` characters. While streaming, a marker whose lookahead window
    has not fully arrived is not judged yet.
    """
    fences = scan_fences(text)
    offsets: List[int] = []
    for m in REPLACE_MARKER_RE.finditer(text):
        if inside_fence(fences, m.start()):
            continue
        window = text[m.end():m.end() + lookahead]
        if "```" in window or "~~~" in window:
            continue
        if streaming and m.end() + lookahead > len(text):
            continue
        offsets.append(m.start())
    return offsets


def _as_strategy(item: Union[Strategy, StrategyFunc]) -> Strategy:
    if isinstance(item, Strategy):
        return item
    return Strategy(getattr(item, "__name__", repr(item)), item)


def run_strategies(
    text: str,
    config: ParserConfig,
    strategies: Iterable[Union[Strategy, StrategyFunc]] = DEFAULT_STRATEGIES,
    log: logging.Logger | NoopLogger | None = None,
) -> List[EditOperation]:
    """
    Run strategies in order and return the candidates of the first one that
    yields any. Results of different strategies are never merged.
    Raises ExtractError if a strategy fails.
    """
    log = log or NoopLogger()
    for item in strategies:
        strategy = _as_strategy(item)
        try:
            operations = strategy(text, config)
        except ExtractError:
            raise
        except Exception as e:
            raise ExtractError(f"strategy '{strategy.name}' failed: {e}", strategy=strategy.name) from e
        if operations:
            log.debug("strategy '%s' matched %d operation(s)", strategy.name, len(operations))
            return list(operations)
    return []


def parse_edit_descriptions(
    text: str,
    *,
    config: Optional[ParserConfig] = None,
    strategies: Optional[Sequence[Union[Strategy, StrategyFunc]]] = None,
    streaming: bool = False,
    logger: logging.Logger | None = None,
    log: bool = False,
) -> ParseResult:
    """
    Stateless parse of a complete (or, with `streaming=True`, still growing)
    assistant response into edit operations plus diagnostics.

    Never raises: every failure becomes an entry in `ParseResult.errors`.
    """
    lg = resolve_logger(logger=logger, enabled=log, name=__name__)
    cfg = config or DEFAULT_CONFIG
    result = ParseResult()

    try:
        if has_full_file_markers(text):
            result.errors.append(FULL_FILE_ERROR)

        if find_malformed_pairs(text, cfg.replace_lookahead, streaming=streaming):
            result.errors.append(MALFORMED_PAIR_ERROR)

        result.operations = run_strategies(
            text, cfg, DEFAULT_STRATEGIES if strategies is None else strategies, lg
        )
        result.errors.extend(protected_path_errors(result.operations, cfg.protected_paths))
    except Exception as e:
        lg.error("edit extraction failed: %s", e)
        result.errors.append(f"{PARSE_FAILURE_PREFIX}{e}")

    return result
