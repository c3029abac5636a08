"""core/validate.py — Staged checks on a freshly read map.

Stages run in order and each one reports *every* problem it finds
before the load is rejected.  A stage only runs once all earlier
stages passed, so a file with several kinds of mistakes is fixed one
stage at a time:

    sections    size / encodings / data all present
    size        ``(W x H)``, both at least 1
    encodings   unique codes, unique one-character non-numeric values
    data        line count == H, every line length == W
    characters  every grid char is encoded (space is always allowed)
    elements    every ``[element]`` block is complete and in bounds

Every diagnostic also goes to the ``DevLog`` under ``validate``.
"""

from __future__ import annotations
import re

from components.characters import (
    PLAYER_SKINS, character_role, is_character_skin, parse_position, parse_zone,
)
from components.dev_log import DevLog
from components.ground import ground_kind
from components.items import ItemType, item_type
from core.map_parser import RawMap

_SIZE_RE = re.compile(r"^\(\s*(\d+)\s*x\s*(\d+)\s*\)$")

BLANK = " "


class MapValidationError(ValueError):
    """A map failed validation.  ``messages`` holds every diagnostic."""

    def __init__(self, stage: str, messages: list[str]):
        self.stage = stage
        self.messages = list(messages)
        lines = [f"{stage}: {len(self.messages)} problem(s)"]
        lines += [f"  {m}" for m in self.messages]
        super().__init__("\n".join(lines))


def parse_size(text: str) -> tuple[int, int]:
    """``"(5 x 3)"`` → ``(5, 3)``.  Raises ValueError if malformed."""
    m = _SIZE_RE.match(text.strip())
    if not m:
        raise ValueError(f"bad size {text!r}, expected (W x H)")
    return int(m.group(1)), int(m.group(2))


def _region(row: int, col: int, width: int, height: int) -> str:
    if row == 0:
        return "first line"
    if row == height - 1:
        return "last line"
    if col == 0 or col == width - 1:
        return "border"
    return "interior"


class MapValidator:
    def __init__(self, raw: RawMap, log: DevLog | None = None):
        self.raw = raw
        self.log = log
        self.width = 0
        self.height = 0
        self.problems: dict[str, list[str]] = {}
        self._stage = ""

    # ── reporting ────────────────────────────────────────────────────

    def _report(self, msg: str, **details) -> None:
        self.problems.setdefault(self._stage, []).append(msg)
        if self.log is not None:
            self.log.error("validate", msg, stage=self._stage, **details)

    def _warn(self, msg: str, **details) -> None:
        if self.log is not None:
            self.log.warning("validate", msg, stage=self._stage, **details)

    # ── driver ───────────────────────────────────────────────────────

    def stages(self):
        return (
            ("sections", self.check_sections),
            ("size", self.check_size),
            ("encodings", self.check_encodings),
            ("data", self.check_data_shape),
            ("characters", self.check_characters),
            ("elements", self.check_elements),
        )

    def run(self) -> tuple[int, int]:
        """Run every stage.  Returns ``(width, height)`` on success."""
        for name, check in self.stages():
            self._stage = name
            errors = check()
            if errors:
                raise MapValidationError(name, self.problems[name])
            if self.log is not None:
                self.log.record("validate", f"{name}: ok")
        return self.width, self.height

    # ── stages ───────────────────────────────────────────────────────

    def check_sections(self) -> int:
        errors = 0
        if not self.raw.size_text:
            self._report("missing section: size")
            errors += 1
        if not self.raw.encodings and not self.raw.dangling_codes:
            self._report("missing section: encodings")
            errors += 1
        if self.raw.data is None or not self.raw.data.strip("\n"):
            self._report("missing section: data")
            errors += 1
        return errors

    def check_size(self) -> int:
        try:
            w, h = parse_size(self.raw.size_text)
        except ValueError as exc:
            self._report(str(exc), size=self.raw.size_text)
            return 1
        errors = 0
        if w < 1:
            self._report(f"size width must be at least 1, got {w}")
            errors += 1
        if h < 1:
            self._report(f"size height must be at least 1, got {h}")
            errors += 1
        self.width, self.height = w, h
        return errors

    def check_encodings(self) -> int:
        errors = 0
        seen_codes: set[str] = set()
        seen_chars: set[str] = set()
        for code, char in self.raw.encodings:
            if code in seen_codes:
                self._report(f"duplicate key {code!r} in encodings", code=code)
                errors += 1
            seen_codes.add(code)
            if len(char) != 1:
                self._report(f"encoding for {code} must be one character, "
                             f"got {char!r}", code=code)
                errors += 1
            elif char.isdigit():
                self._report(f"encoding for {code} must not be numeric, "
                             f"got {char!r}", code=code)
                errors += 1
            if char in seen_chars:
                self._report(f"duplicate value {char!r} in encodings", code=code)
                errors += 1
            seen_chars.add(char)
        for code in self.raw.dangling_codes:
            self._report(f"encoding {code!r} has no character", code=code)
            errors += 1
        return errors

    def check_data_shape(self) -> int:
        errors = 0
        lines = self.raw.data_lines
        if len(lines) != self.height:
            self._report(f"dimension mismatch: size declares {self.height} "
                         f"line(s), data has {len(lines)}",
                         expected=self.height, got=len(lines))
            errors += 1
        for i, line in enumerate(lines, start=1):
            if len(line) < self.width:
                self._report(f"dimension mismatch: line {i} too short "
                             f"({len(line)} < {self.width})", line=i)
                errors += 1
            elif len(line) > self.width:
                self._report(f"dimension mismatch: line {i} too long "
                             f"({len(line)} > {self.width})", line=i)
                errors += 1
        return errors

    def check_characters(self) -> int:
        errors = 0
        table = self.raw.encoding_table()
        for row, line in enumerate(self.raw.data_lines):
            for col, char in enumerate(line):
                if char == BLANK or char in table:
                    continue
                where = _region(row, col, self.width, self.height)
                self._report(f"unknown code {char!r} at row {row + 1}, "
                             f"column {col + 1} ({where})",
                             row=row + 1, column=col + 1, code=char)
                errors += 1
        return errors

    def check_elements(self) -> int:
        errors = 0
        players = 0
        for n, block in enumerate(self.raw.elements, start=1):
            errors += self._check_element(n, block)
            if block.get("player", "").strip().lower() == "true":
                players += 1
        if players > 1:
            self._report(f"{players} elements are marked as the player, "
                         f"at most one allowed")
            errors += 1
        return errors

    def _check_element(self, n: int, block: dict[str, str]) -> int:
        label = f"element {n}"
        skin = block.get("skin", "").strip()
        errors = 0
        if not skin:
            self._report(f"{label}: missing skin", element=n)
            errors += 1
        if "position" not in block:
            self._report(f"{label}: missing position", element=n)
            errors += 1
        else:
            try:
                pos = parse_position(block["position"])
            except ValueError as exc:
                self._report(f"{label}: {exc}", element=n)
                errors += 1
            else:
                if not (0 <= pos.x < self.width and 0 <= pos.y < self.height):
                    self._report(f"{label}: position {pos} outside the "
                                 f"{self.width}x{self.height} map", element=n)
                    errors += 1
        for key in ("health", "damage"):
            if key in block and not block[key].strip().isdigit():
                self._report(f"{label}: {key} must be an integer, "
                             f"got {block[key]!r}", element=n)
                errors += 1
        if "zone" in block:
            try:
                parse_zone(block["zone"])
            except ValueError as exc:
                self._report(f"{label}: {exc}", element=n)
                errors += 1
        if not skin:
            return errors
        return errors + self._check_kind(label, n, skin, block)

    def _check_kind(self, label: str, n: int, skin: str,
                    block: dict[str, str]) -> int:
        errors = 0
        is_player = block.get("player", "").strip().lower() == "true"
        if is_player and skin.upper() not in PLAYER_SKINS:
            self._report(f"{label}: {skin} cannot be the player", element=n)
            return 1
        if is_character_skin(skin):
            role = character_role(skin, block)
            if role in ("player", "enemy") and _int(block.get("health")) <= 0:
                self._report(f"{label}: {role} needs health > 0", element=n)
                errors += 1
            if role == "enemy" and "damage" not in block:
                self._report(f"{label}: enemy needs damage", element=n)
                errors += 1
        elif item_type(skin) is ItemType.SWORD:
            if "damage" not in block:
                self._report(f"{label}: sword needs damage", element=n)
                errors += 1
        elif item_type(skin) is None and ground_kind(skin) is None:
            self._warn(f"{label}: unknown skin {skin!r}, ignored", element=n)
        return errors


def _int(value: str | None) -> int:
    if value is None or not value.strip().isdigit():
        return 0
    return int(value)


def validate(raw: RawMap, log: DevLog | None = None) -> tuple[int, int]:
    """Validate *raw*; returns ``(width, height)`` or raises."""
    return MapValidator(raw, log).run()
