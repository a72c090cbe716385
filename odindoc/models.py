"""Core data models shared across odindoc components."""

from dataclasses import dataclass
from enum import Enum
from typing import List


class EntryKind(Enum):
    """Declaration categories derived from the signature text."""

    PROCEDURE = "procedure"
    STRUCT = "struct"
    ENUM = "enum"
    UNION = "union"
    BIT_SET = "bit_set"
    CONSTANT = "constant"

    @property
    def group(self) -> str:
        """Return the report section this kind is listed under."""
        if self is EntryKind.CONSTANT:
            return "constants"
        if self is EntryKind.PROCEDURE:
            return "procedures"
        return "types"


@dataclass(frozen=True)
class DocEntry:
    """A single documented top-level declaration from one source file."""

    name: str
    kind: EntryKind
    signature: str
    doc_comment: str
    source_file: str
    source_line: int
    is_private: bool

    @property
    def declaration(self) -> str:
        return f"{self.name} :: {self.signature}" if self.signature else f"{self.name} ::"

    @property
    def doc_lines(self) -> List[str]:
        if not self.doc_comment:
            return []
        return self.doc_comment.split("\n")
