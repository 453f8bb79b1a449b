from dataclasses import dataclass


@dataclass
class CodeFence:
    """A fenced code block (``` or ~~~) located in a buffer."""
    start: int         # abs index of the opener's first fence char
    end: int           # abs index AFTER the closer run (len(text) when unclosed)
    body_start: int    # abs index of the first body char (line after the opener)
    body_end: int      # abs index where the closer starts (len(text) when unclosed)
    char: str          # '`' or '~'
    length: int        # opener run length (>=3)
    info: str          # full info string after the opener run, stripped
    language: str      # first token of the info string, lowercased ('' if none)
    body: str
    closed: bool       # False while the closer has not streamed in yet
