"""
  Scrap lexer

- Single compiled regex with one named group per token kind
- Streaming: `lex` is a generator of Token tuples
- Comments (// and /* */) and whitespace are skipped, line/column tracked
"""

from __future__ import annotations

import re
from typing import Iterator, NamedTuple

from scrap.errors import ScrapSyntaxError

KEYWORDS = frozenset({
    "fn", "const", "var", "export", "module", "return",
    "if", "else", "true", "false", "undefined", "instanceof", "in",
})

TOKEN_RE = re.compile(
    r"(?P<newline>\n)"
    r"|(?P<space>[ \t\r\f]+)"
    r"|(?P<comment>//[^\n]*)"  # single-line comment
    r"|(?P<ml_comment>/\*.*?\*/)"  # multi-line comment
    r"|(?P<ml_open>/\*)"  # multi-line comment never closed
    r"|(?P<float>\d+\.\d+(?:[eE][+-]?\d+)?)"
    r"|(?P<hex>0[xX][0-9A-Fa-f]+)"
    r"|(?P<integer>\d+)"
    r'|(?P<string>"(?:\\.|[^\\"\n])*")'  # double-quoted strings
    r"|(?P<char>'(?:\\.|[^\\'\n])')"  # single character
    r"|(?P<name>[A-Za-z_$][A-Za-z0-9_$]*)"
    r"|(?P<op>\.\.\.|::|==|!=|<=|>=|[-+*/%<>=])"
    r"|(?P<punct>[(){}\[\],;:.])",
    re.DOTALL,
)

ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "0": "\0",
    "\\": "\\",
    '"': '"',
    "'": "'",
}


class Token(NamedTuple):
    kind: str  # name, keyword, integer, float, string, char, op, punct
    value: str
    line: int
    column: int


def unescape(text: str, line: int = 0, column: int = 0) -> str:
    out = []
    chars = iter(text)
    for c in chars:
        if c != "\\":
            out.append(c)
            continue
        nxt = next(chars, "")
        if nxt not in ESCAPES:
            raise ScrapSyntaxError(f"Unknown escape sequence '\\{nxt}'", line, column)
        out.append(ESCAPES[nxt])
    return "".join(out)


def lex(source: str) -> Iterator[Token]:
    """Token generator: yields Token(kind, value, line, column)."""
    pos = 0
    n = len(source)
    line = 1
    line_start = 0

    while pos < n:
        m = TOKEN_RE.match(source, pos)
        column = pos - line_start + 1
        if not m:
            raise ScrapSyntaxError(f"Unexpected character {source[pos]!r}", line, column)
        kind = m.lastgroup
        text = m.group()
        pos = m.end()

        if kind == "ml_open":
            raise ScrapSyntaxError("Unterminated multi-line comment", line, column)

        if kind == "newline":
            line += 1
            line_start = pos
            continue
        if kind in ("space", "comment"):
            continue
        if kind == "ml_comment":
            # keep line numbers right across multi-line comments
            breaks = text.count("\n")
            if breaks:
                line += breaks
                line_start = m.start() + text.rfind("\n") + 1
            continue

        if kind == "name" and text in KEYWORDS:
            yield Token("keyword", text, line, column)
        elif kind == "hex":
            yield Token("integer", str(int(text, 16)), line, column)
        elif kind == "string":
            yield Token("string", unescape(text[1:-1], line, column), line, column)
        elif kind == "char":
            yield Token("char", unescape(text[1:-1], line, column), line, column)
        else:
            yield Token(kind, text, line, column)
