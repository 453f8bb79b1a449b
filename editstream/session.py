# editstream/session.py
"""
One streamed assistant turn.

A `Session` owns the accumulated text, the per-edit lifecycle map and the
ledger of completed edits. Nothing is shared between sessions, so several
streams can be parsed side by side.

    session = Session(log=True)
    for chunk in stream:
        result = session.detect_progressive_edits(chunk, on_edit_complete=apply)
    final = session.finish(on_edit_complete=apply)
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Union

from ._logging import OnceLogger, resolve_logger
from .config import DEFAULT_CONFIG, ParserConfig
from .extract.main import FULL_FILE_ERROR, MALFORMED_PAIR_ERROR, parse_edit_descriptions
from .extract.strategies import DEFAULT_STRATEGIES, Strategy, StrategyFunc
from .models.edit import EditOperation
from .models.result import EditState, ProgressiveEditResult
from .tracking import CompletedEditLedger, EditCallback, EditStateTracker

# Buffers shorter than this are not worth a "no edits" message.
_QUIET_BUFFER_LENGTH = 100
_MANY_OPERATIONS = 10


class Session:
    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        strategies: Optional[Sequence[Union[Strategy, StrategyFunc]]] = None,
        logger: logging.Logger | None = None,
        log: bool = False,
    ):
        self.config = config or DEFAULT_CONFIG
        self.strategies = tuple(DEFAULT_STRATEGIES if strategies is None else strategies)
        self._logger = logger
        self._log_enabled = log
        self._log = OnceLogger(resolve_logger(logger=logger, enabled=log, name="editstream.session"))
        self._buffer: List[str] = []
        self.ledger = CompletedEditLedger(self.config)
        self.tracker = EditStateTracker(self.config, self.ledger)

    @property
    def content(self) -> str:
        return "".join(self._buffer)

    def append(self, chunk: str) -> None:
        if chunk:
            self._buffer.append(chunk)

    def parse(
        self,
        *,
        on_edit_detected: Optional[EditCallback] = None,
        on_edit_complete: Optional[EditCallback] = None,
    ) -> ProgressiveEditResult:
        """Re-parse the whole buffer as text that may still be growing."""
        return self._parse(True, on_edit_detected, on_edit_complete)

    def detect_progressive_edits(
        self,
        chunk: str,
        *,
        on_edit_detected: Optional[EditCallback] = None,
        on_edit_complete: Optional[EditCallback] = None,
    ) -> ProgressiveEditResult:
        self.append(chunk)
        return self.parse(on_edit_detected=on_edit_detected, on_edit_complete=on_edit_complete)

    def finish(
        self,
        *,
        on_edit_detected: Optional[EditCallback] = None,
        on_edit_complete: Optional[EditCallback] = None,
    ) -> ProgressiveEditResult:
        """Final parse once the stream has ended; every marker is judged."""
        return self._parse(False, on_edit_detected, on_edit_complete)

    def reset(self) -> None:
        self._buffer.clear()
        self.tracker.clear()
        self._log.clear()

    def detected_files(self) -> List[str]:
        return self.tracker.detected_files()

    def first_detected_file(self) -> Optional[str]:
        return self.tracker.first_detected_file()

    def _parse(
        self,
        streaming: bool,
        on_edit_detected: Optional[EditCallback],
        on_edit_complete: Optional[EditCallback],
    ) -> ProgressiveEditResult:
        text = self.content
        parsed = parse_edit_descriptions(
            text,
            config=self.config,
            strategies=self.strategies,
            streaming=streaming,
            logger=self._logger,
            log=self._log_enabled,
        )
        changes = self.tracker.observe(
            parsed.operations,
            on_edit_detected=on_edit_detected,
            on_edit_complete=on_edit_complete,
        )
        result = ProgressiveEditResult(
            detected_edits=changes.detected,
            in_progress_edits=changes.writing,
            complete_edits=self.ledger.merged_with(changes.completed),
            detected_files=self.tracker.file_states(),
            operations=parsed.operations,
            errors=parsed.errors,
        )
        self._report(text, parsed.operations, result)
        return result

    def _report(self, text: str, operations: List[EditOperation], result: ProgressiveEditResult) -> None:
        log = self._log
        if FULL_FILE_ERROR in result.errors:
            log.once("full-file", "warning", "full file markers detected; targeted edits required")
        if MALFORMED_PAIR_ERROR in result.errors:
            log.once("malformed", "warning", "'Replace with' marker without a code block")

        if not operations:
            if len(text) > _QUIET_BUFFER_LENGTH:
                log.once("no-edits", "info", "no edits detected in %d chars of response", len(text))
            return

        files = sorted({op.file_path for op in operations})
        log.once("edits", "info", "edits detected: %d operation(s) in %s", len(operations), ", ".join(files))
        completed = sum(1 for state in result.detected_files.values() if state is EditState.COMPLETE)
        if len(operations) > _MANY_OPERATIONS and not completed:
            log.once("none-complete", "warning", "%d operations detected but none complete", len(operations))
