"""Line-oriented extraction of documented declarations from Odin source."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List

from .models import DocEntry, EntryKind

COMMENT_MARKER = "//"
BINDING_OPERATOR = "::"
BODY_OPEN = "{"
PRIVATE_MARKERS = ("@(private", "@private")

_LEADING_TOKEN = re.compile(r"^[^\W\d]\w*")

# Checked in order; the first token match wins.
_KIND_TABLE: tuple[tuple[str, EntryKind], ...] = (
    ("proc", EntryKind.PROCEDURE),
    ("struct", EntryKind.STRUCT),
    ("enum", EntryKind.ENUM),
    ("union", EntryKind.UNION),
    ("bit_set", EntryKind.BIT_SET),
)


class LineKind(Enum):
    """Categories a source line can fall into, in precedence order."""

    PRIVATE = auto()
    COMMENT = auto()
    BLANK = auto()
    DECLARATION = auto()
    CODE = auto()


@dataclass
class _ScanState:
    """Carried state for one file; discarded when the file is done."""

    comment: List[str] = field(default_factory=list)
    private: bool = False
    last_was_code: bool = False

    def reset(self) -> None:
        self.comment = []
        self.private = False
        self.last_was_code = False


def classify_line(line: str) -> LineKind:
    """Return the category of a raw source line."""
    stripped = line.strip()
    if any(marker in line for marker in PRIVATE_MARKERS):
        return LineKind.PRIVATE
    if stripped.startswith(COMMENT_MARKER):
        return LineKind.COMMENT
    if not stripped:
        return LineKind.BLANK
    if BINDING_OPERATOR in stripped:
        name = stripped.split(BINDING_OPERATOR, 1)[0].strip()
        if is_binding_name(name):
            return LineKind.DECLARATION
    return LineKind.CODE


def classify_kind(signature: str) -> EntryKind:
    """Map the leading token of a signature to its declaration kind."""
    match = _LEADING_TOKEN.match(signature)
    if not match:
        return EntryKind.CONSTANT
    token = match.group(0)
    for keyword, kind in _KIND_TABLE:
        if token == keyword:
            return kind
    return EntryKind.CONSTANT


def is_binding_name(name: str) -> bool:
    """True for one identifier or a comma-separated list of them (``A, B``)."""
    if not name:
        return False
    return all(part.strip().isidentifier() for part in name.split(","))


def is_private_name(name: str) -> bool:
    """Names starting with an underscore or a lowercase ASCII letter are private."""
    if not name:
        return False
    first = name[0]
    return first == "_" or "a" <= first <= "z"


def split_declaration(line: str) -> tuple[str, str]:
    """Split a declaration line into its name and body-stripped signature."""
    name, _, rest = line.strip().partition(BINDING_OPERATOR)
    signature = rest.strip()
    if BODY_OPEN in signature:
        signature = signature.split(BODY_OPEN, 1)[0].strip()
    return name.strip(), signature


class DeclarationScanner:
    """Turns the text of a single source file into documented declarations."""

    def scan(self, text: str, source_file: str = "") -> List[DocEntry]:
        state = _ScanState()
        entries: List[DocEntry] = []
        for number, line in enumerate(text.split("\n"), start=1):
            kind = classify_line(line)
            if kind is LineKind.PRIVATE:
                state.private = True
                state.last_was_code = False
            elif kind is LineKind.COMMENT:
                if state.last_was_code:
                    state.last_was_code = False
                else:
                    state.comment.append(_comment_text(line))
            elif kind is LineKind.BLANK:
                if state.comment:
                    state.comment.append("")
                state.last_was_code = False
            elif kind is LineKind.DECLARATION:
                entries.append(self._emit(line, number, source_file, state))
                state.reset()
            else:
                state.comment = []
                state.private = False
                state.last_was_code = True
        return entries

    @staticmethod
    def _emit(line: str, number: int, source_file: str, state: _ScanState) -> DocEntry:
        name, signature = split_declaration(line)
        comment = list(state.comment)
        while comment and not comment[-1]:
            comment.pop()
        return DocEntry(
            name=name,
            kind=classify_kind(signature),
            signature=signature,
            doc_comment="\n".join(comment),
            source_file=source_file,
            source_line=number,
            is_private=state.private or is_private_name(name),
        )


def _comment_text(line: str) -> str:
    body = line.strip()[len(COMMENT_MARKER):]
    if body.startswith(" "):
        body = body[1:]
    return body.rstrip()


def scan_source(text: str, source_file: str = "") -> List[DocEntry]:
    """Scan one file's text with a fresh scanner."""
    return DeclarationScanner().scan(text, source_file)


__all__ = [
    "DeclarationScanner",
    "LineKind",
    "classify_kind",
    "classify_line",
    "is_binding_name",
    "is_private_name",
    "scan_source",
    "split_declaration",
]
