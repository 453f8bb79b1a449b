import logging
import textwrap

from editstream.config import ParserConfig
from editstream.extract.main import (
    FULL_FILE_ERROR,
    MALFORMED_PAIR_ERROR,
    PARSE_FAILURE_PREFIX,
    find_malformed_pairs,
    has_full_file_markers,
    parse_edit_descriptions,
)
from editstream.extract.strategies import Strategy


def test_full_file_marker_styles():
    assert has_full_file_markers("// Complete file: App.tsx")
    assert has_full_file_markers("/* complete file: main.css */")
    assert has_full_file_markers("<!-- Complete file: index.html -->")
    assert has_full_file_markers("x\n  # Complete file: app.py")
    assert not has_full_file_markers("The complete file is shown below")


def test_full_file_does_not_stop_extraction():
    text = textwrap.dedent("""\
        In: src/a.ts
        Find this code:
        ```ts
        run();
        ```
        Replace with:
        ```ts
        run(true);
        ```
        And for the other file:
        // Complete file: src/b.ts
        """)
    result = parse_edit_descriptions(text)

    assert result.has_errors
    assert result.errors == [FULL_FILE_ERROR]
    assert len(result.operations) == 1


def test_malformed_pair_reported_once():
    text = (
        "Find this code:\n```\nfoo();\n```\n"
        "Replace with:\nJust call bar instead of foo.\n"
        "Replace with:\nSame again.\n"
    )
    result = parse_edit_descriptions(text)

    assert result.errors.count(MALFORMED_PAIR_ERROR) == 1


def test_malformed_pair_waits_for_lookahead_while_streaming():
    text = "Find this code:\n```\nfoo();\n```\nReplace with:\nJust call bar"

    assert find_malformed_pairs(text, 500, streaming=True) == []
    assert find_malformed_pairs(text, 500) == [text.index("Replace")]
    assert find_malformed_pairs(text + " " * 600, 500, streaming=True) == [text.index("Replace")]


def test_protected_paths_are_flagged():
    text = textwrap.dedent("""\
        In: secrets/keys.json
        Find this code:
        ```json
        "key": "old",
        ```
        Replace with:
        ```json
        "key": "new",
        ```
        """)
    cfg = ParserConfig(protected_paths=("secrets/", "*.lock"))
    result = parse_edit_descriptions(text, config=cfg)

    assert result.errors == ["Edit targets protected path 'secrets/keys.json'"]
    assert len(result.operations) == 1
    assert not parse_edit_descriptions(text).has_errors


def test_strategy_failure_is_converted(caplog):
    def broken(text, config):
        raise ValueError("bad input")

    with caplog.at_level(logging.ERROR):
        result = parse_edit_descriptions("text", strategies=[Strategy("broken", broken)], log=True)

    assert result.operations == []
    assert result.errors == [f"{PARSE_FAILURE_PREFIX}strategy 'broken' failed: bad input"]
    assert any("bad input" in rec.message for rec in caplog.records)


def test_empty_text():
    result = parse_edit_descriptions("")
    assert result.operations == []
    assert not result.has_errors
