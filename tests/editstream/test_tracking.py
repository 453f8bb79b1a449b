from editstream.config import ParserConfig
from editstream.models.edit import EditKind, EditOperation, EditTarget
from editstream.models.result import EditState
from editstream.tracking import (
    CompletedEditLedger,
    EditStateTracker,
    content_signature,
    edit_key,
)


def _op(file_path="src/a.ts", name=None, snippet=None, old=None, new="", json_path=None):
    return EditOperation(
        kind=EditKind.REPLACE,
        file_path=file_path,
        target=EditTarget(name=name, code_snippet=snippet, json_path=json_path),
        old_code=old,
        new_code=new,
    )


def test_edit_key_prefers_name_then_snippet_then_json_path():
    assert edit_key(_op(name="render", snippet="x")) == "src/a.ts:render"
    assert edit_key(_op(snippet="a" * 80)) == "src/a.ts:" + "a" * 50
    assert edit_key(_op(file_path="package.json", json_path="scripts.test")) == "package.json:scripts.test"
    assert edit_key(_op()) == "src/a.ts:unknown"


def test_edit_key_honours_configured_prefix():
    cfg = ParserConfig(key_snippet_length=5)
    assert edit_key(_op(snippet="abcdefghij"), cfg) == "src/a.ts:abcde"


def test_content_signature_ignores_whitespace_in_new_code():
    a = _op(name="f", new="return  a +\n b;")
    b = _op(name="f", new="return a + b;")
    assert content_signature(a) == content_signature(b) == "src/a.ts::f::returna+b;"


def test_ledger_dedups_by_signature():
    ledger = CompletedEditLedger()
    first = _op(name="f", old="x", new="y = 1;")
    same = _op(name="f", old="something else", new="y  =  1;")
    other = _op(name="g", old="x", new="y = 1;")

    assert ledger.add(first) is True
    assert ledger.add(same) is False
    assert ledger.add(other) is True
    assert len(ledger) == 2
    assert same in ledger
    assert ledger.operations == [first, other]


def test_ledger_merge_keeps_history_first():
    ledger = CompletedEditLedger()
    old = _op(name="f", new="a();")
    ledger.add(old)
    fresh = _op(name="g", new="b();")

    assert ledger.merged_with([old, fresh]) == [old, fresh]
    assert len(ledger) == 1


def test_tracker_lifecycle_and_callbacks():
    tracker = EditStateTracker()
    detected, completed = [], []

    def on_detected(op, path):
        detected.append(path)

    def on_complete(op, path):
        completed.append(path)

    pending = _op(snippet="old();", old="old();")
    done = _op(snippet="old();", old="old();", new="fresh();")

    t1 = tracker.observe([pending], on_edit_detected=on_detected, on_edit_complete=on_complete)
    assert t1.detected == [pending]
    assert t1.writing == [pending]
    assert tracker.state_of(edit_key(pending)) is EditState.WRITING

    t2 = tracker.observe([done], on_edit_detected=on_detected, on_edit_complete=on_complete)
    assert t2.detected == []
    assert t2.completed == [done]

    # Later contradictory content for the same key is ignored.
    t3 = tracker.observe([pending], on_edit_detected=on_detected, on_edit_complete=on_complete)
    assert t3.writing == [] and t3.completed == []
    assert tracker.state_of(edit_key(pending)) is EditState.COMPLETE

    assert detected == ["src/a.ts"]
    assert completed == ["src/a.ts"]
    assert len(tracker.ledger) == 1


def test_target_name_alone_completes_with_new_code():
    tracker = EditStateTracker()
    op = _op(name="Header", new="export function Header() {}")
    tracker.observe([op])
    assert tracker.state_of(edit_key(op)) is EditState.COMPLETE


def test_operation_without_code_stays_detected():
    tracker = EditStateTracker()
    op = _op(name="Header")
    result = tracker.observe([op])
    assert result.writing == []
    assert tracker.state_of(edit_key(op)) is EditState.DETECTED


def test_file_states_report_most_advanced_state():
    tracker = EditStateTracker()
    tracker.observe([
        _op(snippet="a();", old="a();"),
        _op(snippet="b();", old="b();", new="c();"),
        _op(file_path="src/b.ts", snippet="d();", old="d();"),
        _op(file_path="unknown", snippet="e();", old="e();"),
    ])

    states = tracker.file_states()
    assert states["src/a.ts"] is EditState.COMPLETE
    assert states["src/b.ts"] is EditState.WRITING
    assert tracker.detected_files() == ["src/a.ts", "src/b.ts"]
    assert tracker.first_detected_file() == "src/a.ts"


def test_clear_resets_states_and_ledger():
    tracker = EditStateTracker()
    tracker.observe([_op(name="f", new="x = 1;")])
    tracker.clear()
    assert len(tracker) == 0
    assert len(tracker.ledger) == 0
    assert tracker.file_states() == {}
