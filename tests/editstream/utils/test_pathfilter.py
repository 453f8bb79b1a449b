from editstream.models.edit import EditKind, EditOperation
from editstream.utils.pathfilter import compile_patterns, is_protected, protected_path_errors


def test_no_patterns_protect_nothing():
    assert compile_patterns(()) is None
    assert compile_patterns(("", "# comment")) is None
    assert not is_protected("src/a.ts", ())


def test_gitignore_style_matching():
    patterns = (".env", "secrets/", "*.lock", "!keep.lock")
    assert is_protected(".env", patterns)
    assert is_protected("./.env", patterns)
    assert is_protected("secrets/keys.json", patterns)
    assert is_protected("/yarn.lock", patterns)
    assert not is_protected("keep.lock", patterns)
    assert not is_protected("src/env.ts", patterns)


def test_unknown_file_is_never_protected():
    assert not is_protected("unknown", ("*",))


def test_errors_are_listed_once_per_path():
    ops = [
        EditOperation(kind=EditKind.REPLACE, file_path="config/.env", new_code="A=1"),
        EditOperation(kind=EditKind.REPLACE, file_path="config/.env", new_code="B=2"),
        EditOperation(kind=EditKind.REPLACE, file_path="src/app.ts", new_code="x"),
    ]
    assert protected_path_errors(ops, (".env",)) == ["Edit targets protected path 'config/.env'"]
