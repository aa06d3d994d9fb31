"""
Escaping of arbitrary text for AppleScript string literals.

Scripts travel to osascript as a single-quoted shell argument, and user
text sits inside a double-quoted AppleScript literal within that script.
Both quoting layers are handled here.
"""

import re

LINE_BREAK = re.compile(r"\r\n|\r|\n")

# Joins two literal fragments around an AppleScript constant or expression.
_SPLICE = '" & {} & "'


def escape_line(text: str) -> str:
    """Escape a single line for use inside a double-quoted literal."""
    parts = []
    for char in text:
        if char == "\\":
            parts.append("\\\\")
        elif char == '"':
            parts.append('\\"')
        elif char == "'":
            # Close the shell's single quotes, emit a quote, reopen them
            parts.append("'\\''")
        elif char == "\t":
            parts.append(_SPLICE.format("tab"))
        elif ord(char) < 0x20:
            parts.append(_SPLICE.format(f"(ASCII character {ord(char)})"))
        else:
            parts.append(char)
    return "".join(parts)


def escape(text: str) -> str:
    """
    Escape text so that ``"<result>"`` evaluates back to ``text``.

    Single-line text is escaped in place. Text containing line breaks is
    split and each line escaped on its own, joined with ``return`` so no
    raw newline ends up in the script.

    Args:
        text: Arbitrary user text

    Returns:
        Script-safe text, to be wrapped in double quotes
    """
    if not LINE_BREAK.search(text):
        return escape_line(text)
    return _SPLICE.format("return").join(
        escape_line(line) for line in LINE_BREAK.split(text)
    )


def as_literal(text: str) -> str:
    """Return a parenthesized AppleScript expression evaluating to ``text``."""
    return f'("{escape(text)}")'
