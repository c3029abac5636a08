"""core/directives.py — Turn a validated map into spawn directives.

One ground directive per grid cell (row-major), then one entity
directive per ``[element]`` block in file order.  The World applies
them in exactly that order, so the grid always establishes a cell's
environment before anything is layered onto it.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from components.characters import parse_position
from components.ground import VOID
from components.spatial import Position
from core.map_parser import RawMap
from core.validate import BLANK


@dataclass(frozen=True)
class Directive:
    skin: str
    fields: dict[str, str] = field(default_factory=dict)
    is_entity: bool = False

    @property
    def position(self) -> Position:
        return parse_position(self.fields["position"])


def grid_directives(raw: RawMap) -> list[Directive]:
    table = raw.encoding_table()
    out: list[Directive] = []
    for y, line in enumerate(raw.data_lines):
        for x, char in enumerate(line):
            skin = VOID if char == BLANK else table[char]
            out.append(Directive(skin, {"position": f"({x},{y})"}))
    return out


def element_directives(raw: RawMap) -> list[Directive]:
    return [
        Directive(block["skin"].strip().upper(), dict(block), is_entity=True)
        for block in raw.elements
    ]


def build_directives(raw: RawMap) -> list[Directive]:
    return grid_directives(raw) + element_directives(raw)
