from editstream.utils.parsing import _try_parse_comment_header


def test_bare_path_on_first_line():
    header = _try_parse_comment_header("// src/App.tsx\nexport default App;")
    assert header == {"file_path": "src/App.tsx", "code": "export default App;"}


def test_labelled_path_on_later_line():
    header = _try_parse_comment_header("'use client';\n// In: app/page.tsx\nexport default Page;")
    assert header["file_path"] == "app/page.tsx"
    assert header["code"] == "'use client';\nexport default Page;"


def test_comment_styles():
    assert _try_parse_comment_header("# File: tools/build.py\npass")["file_path"] == "tools/build.py"
    assert _try_parse_comment_header("<!-- index.html -->\n<div></div>")["file_path"] == "index.html"
    assert _try_parse_comment_header("/* styles/app.css */\nbody {}")["file_path"] == "styles/app.css"


def test_ordinary_comments_are_left_alone():
    assert _try_parse_comment_header("x = 1\n// see utils.ts for details") is None
    assert _try_parse_comment_header("x = 1\n// helpers.ts") is None
    assert _try_parse_comment_header("") is None
