"""core/lexer.py — Tokenizer for the map description language.

One compiled alternation of every token pattern is searched from the
cursor.  Alternatives are tried in declaration order, so when two could
match at the same offset the one declared first wins, e.g. ``ZONE``
(``(1,2) (3 x 4)``) is declared before ``POSITION`` (``(1,2)``).

Characters no pattern matches are stepped over; the lexer never raises.

    lexer = Lexer(text)
    for tok in lexer:
        print(tok.kind, tok.content)
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    """Token kinds in precedence order.  Value is the regex."""
    SECTION_HEADER = r"\[\w+\]"
    SIZE           = r"\(\s*\d+\s*x\s*\d+\s*\)"
    DATA_BLOCK     = r'"""[\s\S]*?"""'
    QUOTE          = r'"'
    ZONE           = r"\(\s*\d+\s*,\s*\d+\s*\)\s*\(\s*\d+\s*x\s*\d+\s*\)"
    POSITION       = r"\(\s*\d+\s*,\s*\d+\s*\)"
    NUMBER         = r"\d+"
    IDENTIFIER     = r"[A-Za-z]+"
    LEFT_PARENS    = r"\("
    RIGHT_PARENS   = r"\)"
    COMMA          = r","
    COLON          = r":"
    LEFT_BRACKET   = r"\["
    RIGHT_BRACKET  = r"\]"


_PATTERN = re.compile("|".join(
    f"(?P<{kind.name}>{kind.value})" for kind in TokenKind
))


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    content: str        # stripped text of the match
    offset: int = 0     # match start in the source text


class Lexer:
    def __init__(self, text: str):
        self.text = text
        self._pos = 0

    def _scan(self, pos: int) -> tuple[Token | None, int]:
        m = _PATTERN.search(self.text, pos)
        if m is None:
            return None, pos
        kind = TokenKind[m.lastgroup]
        return Token(kind, m.group().strip(), m.start()), m.end()

    def next(self) -> Token | None:
        """Next token, or ``None`` once the input is exhausted."""
        tok, self._pos = self._scan(self._pos)
        return tok

    def peek(self, n: int = 1) -> list[Token]:
        """Up to *n* upcoming tokens, without moving the cursor."""
        out: list[Token] = []
        pos = self._pos
        for _ in range(n):
            tok, pos = self._scan(pos)
            if tok is None:
                break
            out.append(tok)
        return out

    def __iter__(self):
        while True:
            tok = self.next()
            if tok is None:
                return
            yield tok


def tokenize(text: str) -> list[Token]:
    return list(Lexer(text))
