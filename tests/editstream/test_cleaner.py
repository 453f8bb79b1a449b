import textwrap

from editstream.cleaner import CodeCleaner, any_of, clean_code, is_code_line, is_narrative_line


def test_narrative_lines_are_removed():
    code = textwrap.dedent("""\
        Looking at the error, the handler never returns.
        const handler = () => {
          return 1;
        };
        This keeps the handler predictable.
        """)
    assert clean_code(code) == "const handler = () => {\n  return 1;\n};"


def test_marker_text_and_path_labels_are_stripped():
    code = textwrap.dedent("""\
        In: src/App.tsx
        Replace with:
        export default App;
        """)
    assert clean_code(code) == "export default App;"


def test_blank_lines_inside_code_survive():
    code = "def a():\n    return 1\n\n\ndef b():\n    return 2\n"
    assert clean_code(code) == "def a():\n    return 1\n\n\ndef b():\n    return 2"


def test_common_code_shapes_are_kept():
    for line in (
        "import React from 'react';",
        "<Button onClick={save} />",
        "</div>",
        "@decorator",
        "// comment",
        "# comment",
        "count += 1",
        "user?.profile.name = value",
        "error: string;",
        "console.log(value)",
        "items.map((x) =>",
        "'a string literal'",
        "true,",
        "actor Counter {",
        "...rest",
    ):
        assert is_code_line(line), line


def test_prose_lines_are_dropped():
    for line in (
        "This will fix the issue",
        "Now the component renders correctly",
        "Make sure to restart the server",
    ):
        assert not is_code_line(line), line


def test_narrative_openers_do_not_catch_identifiers():
    assert is_narrative_line("Fix the off-by-one error")
    assert is_narrative_line("## **Summary**")
    assert is_narrative_line("The issue is the missing await")
    assert not is_narrative_line("ErrorBoundary.render()")
    assert not is_narrative_line("error: string;")
    assert not is_narrative_line("lookingGlass = true;")


def test_custom_classifier_widens_what_is_kept():
    def keep_sql(line):
        return line.strip().upper().startswith("SELECT")

    default = CodeCleaner()
    widened = CodeCleaner(classifier=any_of(is_code_line, keep_sql))
    code = "SELECT id FROM users\nconst rows = [];"

    assert default.clean(code) == "const rows = [];"
    assert widened(code) == code


def test_empty_input():
    assert clean_code(None) == ""
    assert clean_code("") == ""
