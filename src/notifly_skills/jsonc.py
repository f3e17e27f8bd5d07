"""JSON-with-comments support.

``//`` line comments and ``/* */`` block comments are removed by a small
state machine that tracks whether it is inside a string literal, so values
such as ``"https://example.com"`` or ``"a // b"`` pass through untouched.
"""

from enum import Enum


class _ScanState(Enum):
    NORMAL = "normal"
    IN_STRING = "in_string"
    IN_LINE_COMMENT = "in_line_comment"
    IN_BLOCK_COMMENT = "in_block_comment"


def strip_jsonc_comments(text: str) -> str:
    """Return *text* with all comments outside string literals removed.

    Newlines that end a line comment are kept so parser error positions
    still point at the right line. An unterminated block comment swallows
    the rest of the input.
    """
    result: list[str] = []
    state = _ScanState.NORMAL
    escaped = False
    i = 0
    length = len(text)

    while i < length:
        ch = text[i]
        nxt = text[i + 1] if i + 1 < length else ""

        if state is _ScanState.IN_STRING:
            result.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                state = _ScanState.NORMAL
            i += 1

        elif state is _ScanState.IN_LINE_COMMENT:
            if ch == "\n":
                result.append(ch)
                state = _ScanState.NORMAL
            i += 1

        elif state is _ScanState.IN_BLOCK_COMMENT:
            if ch == "*" and nxt == "/":
                state = _ScanState.NORMAL
                i += 2
            else:
                i += 1

        elif ch == '"':
            result.append(ch)
            state = _ScanState.IN_STRING
            i += 1
        elif ch == "/" and nxt == "/":
            state = _ScanState.IN_LINE_COMMENT
            i += 2
        elif ch == "/" and nxt == "*":
            state = _ScanState.IN_BLOCK_COMMENT
            i += 2
        else:
            result.append(ch)
            i += 1

    return "".join(result)
