"""core/map_parser.py — Group the token stream into map sections.

A map file looks like::

    size: (6 x 4)
    encodings: WALL: W  GRASS: G  DOOR: D
    data: \"\"\"
    WWWWWW
    WG  GW
    WG DGW
    WWWWWW
    \"\"\"

    [element]
    name: Hero
    skin: BABA
    player: true
    position: (1,1)
    health: 20

``encodings`` pairs are positional: ``WALL: W`` and ``WALL(W)`` read
the same because colons and parentheses are skipped inside the block.
Other ``[header]`` lines (e.g. ``[grid]``) are accepted and ignored.

This module only *reads*; nothing is checked here.  ``core.validate``
decides whether the result is usable.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from core.lexer import Lexer, Token, TokenKind

SECTION_KEYWORDS = frozenset({"size", "encodings", "data"})

ENTITY_ATTRIBUTES = frozenset({
    "name", "skin", "player", "position", "health",
    "kind", "zone", "behavior", "damage",
})

ELEMENT_HEADER = "[element]"


@dataclass
class RawMap:
    """Unvalidated sections of one map file."""
    size_text: str | None = None
    encodings: list[tuple[str, str]] = field(default_factory=list)
    dangling_codes: list[str] = field(default_factory=list)
    elements: list[dict[str, str]] = field(default_factory=list)
    data: str | None = None

    @property
    def data_lines(self) -> list[str]:
        if self.data is None:
            return []
        return self.data.split("\n")

    def encoding_table(self) -> dict[str, str]:
        """``char → skin``.  Later duplicates win; validation rejects them."""
        return {char: code for code, char in self.encodings}


def _normalise_data(content: str) -> str:
    """Strip the quotes and the line breaks hugging them.

    Whatever sits between the last line break and the closing quotes is
    the closing line's indentation, so it goes when it is only
    whitespace.  Every other line is kept verbatim; spaces are cells.
    """
    inner = content[3:-3].replace("\r", "")
    if inner.startswith("\n"):
        inner = inner[1:]
    head, sep, tail = inner.rpartition("\n")
    if sep and not tail.strip():
        inner = head
    return inner


def _is_keyword(tok: Token) -> bool:
    return tok.kind is TokenKind.IDENTIFIER and tok.content in SECTION_KEYWORDS


def _ends_block(tok: Token) -> bool:
    return (tok.kind in (TokenKind.SECTION_HEADER, TokenKind.DATA_BLOCK)
            or _is_keyword(tok))


class MapReader:
    """Single pass over the tokens, filling a ``RawMap``."""

    def __init__(self, text: str):
        self.lexer = Lexer(text)
        self.raw = RawMap()
        self._pending: Token | None = None

    # ── token helpers ────────────────────────────────────────────────

    def _next(self) -> Token | None:
        if self._pending is not None:
            tok, self._pending = self._pending, None
            return tok
        return self.lexer.next()

    def _push_back(self, tok: Token):
        self._pending = tok

    def _skip_colon(self):
        tok = self._next()
        if tok is not None and tok.kind is not TokenKind.COLON:
            self._push_back(tok)

    # ── sections ─────────────────────────────────────────────────────

    def read(self) -> RawMap:
        while (tok := self._next()) is not None:
            self._dispatch(tok)
        return self.raw

    def _dispatch(self, tok: Token):
        if tok.kind is TokenKind.DATA_BLOCK:
            self.raw.data = _normalise_data(tok.content)
        elif tok.kind is TokenKind.SECTION_HEADER:
            if tok.content.lower() == ELEMENT_HEADER:
                self._read_element()
        elif _is_keyword(tok):
            self._skip_colon()
            if tok.content == "size":
                self._read_size()
            elif tok.content == "encodings":
                self._read_encodings()
            # "data" is followed by the DATA_BLOCK token itself

    def _read_size(self):
        tok = self._next()
        if tok is None:
            return
        if tok.kind is TokenKind.SIZE:
            self.raw.size_text = tok.content
            return
        if _ends_block(tok):
            self._push_back(tok)
            return
        # Malformed: keep the raw text so validation can report it
        parts = [tok.content]
        while tok.kind is not TokenKind.RIGHT_PARENS:
            tok = self._next()
            if tok is None:
                break
            if _ends_block(tok):
                self._push_back(tok)
                break
            parts.append(tok.content)
        self.raw.size_text = " ".join(parts)

    def _read_encodings(self):
        codes: list[str] = []
        while (tok := self._next()) is not None:
            if _ends_block(tok) or tok.kind is TokenKind.LEFT_BRACKET:
                self._push_back(tok)
                break
            if tok.kind in (TokenKind.COLON, TokenKind.LEFT_PARENS,
                            TokenKind.RIGHT_PARENS):
                continue
            codes.append(tok.content)
        pairs = len(codes) // 2
        self.raw.encodings.extend(
            (codes[2 * i], codes[2 * i + 1]) for i in range(pairs))
        if len(codes) % 2:
            self.raw.dangling_codes.append(codes[-1])

    def _read_element(self):
        props: dict[str, str] = {}
        while (tok := self._next()) is not None:
            if _ends_block(tok):
                self._push_back(tok)
                break
            if tok.content not in ENTITY_ATTRIBUTES:
                continue
            self._skip_colon()
            value = self._next()
            if value is None:
                props[tok.content] = ""
                break
            if _ends_block(value):
                props[tok.content] = ""
                self._push_back(value)
                break
            props[tok.content] = value.content
        self.raw.elements.append(props)


def read_map(text: str) -> RawMap:
    return MapReader(text).read()
