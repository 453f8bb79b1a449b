from editstream.extract.fences import fence_after, fence_hint, inside_fence, scan_fences


def test_closed_and_unclosed_fences():
    text = "intro\n```ts\nconst a = 1;\n```\nmiddle\n```ts\nconst b"
    fences = scan_fences(text)

    assert len(fences) == 2
    first, second = fences
    assert first.closed and first.language == "ts"
    assert first.body == "const a = 1;\n"
    assert not second.closed
    assert second.body == "const b"
    assert second.end == len(text)


def test_opener_needs_its_newline():
    assert scan_fences("Replace with:\n```ts") == []


def test_longer_fence_encloses_shorter_runs():
    text = "````md\n```py\nx = 1\n```\n````\nafter"
    fences = scan_fences(text)

    assert len(fences) == 1
    assert fences[0].closed
    assert fences[0].body == "```py\nx = 1\n```\n"


def test_closer_must_end_its_line():
    text = "```\nprint('```' + 'x')\n```\n"
    fences = scan_fences(text)

    assert len(fences) == 1
    assert fences[0].body == "print('```' + 'x')\n"


def test_tilde_fences():
    fences = scan_fences("~~~python\npass\n~~~\n")
    assert fences[0].char == "~"
    assert fences[0].language == "python"


def test_position_helpers():
    text = "a\n```\nx\n```\nb\n```\ny\n```\n"
    fences = scan_fences(text)

    assert fence_after(fences, 0) is fences[0]
    assert fence_after(fences, fences[0].end) is fences[1]
    assert fence_after(fences, len(text)) is None
    assert inside_fence(fences, fences[0].start + 4)
    assert not inside_fence(fences, 0)


def test_file_hint_in_info_string():
    fence = scan_fences("```ts file=src/app.ts\nx\n```\n")[0]
    assert fence_hint(fence) == "src/app.ts"
    assert fence.language == "ts"
    assert fence_hint(scan_fences("```ts\nx\n```\n")[0]) == ""
