"""Data records shared by the config linter passes.

The structural parser builds a ParseResult once per file; the validators only
read it. Lint findings are plain records (not exceptions) so that a single
file can report many of them at once.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

# ---------------------------------------------------------------------------
# Parsed structure
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Position:
    """1-indexed (row, col) location in a source file."""
    row: int
    col: int

    def at(self, file_path: str) -> str:
        return f"{file_path}:{self.row}:{self.col}"


@dataclass(frozen=True)
class BracketToken:
    """Content of a `[...]` occurrence, e.g. `closet.indoors`."""
    token: str
    position: Position
    file_path: str


@dataclass
class Item:
    text: str
    position: Position

    @property
    def normalized(self) -> str:
        return self.text.strip().lower()


@dataclass
class Subsection:
    name: str
    position: Position  # first occurrence of the header line
    items: list[Item] = field(default_factory=list)


@dataclass
class Section:
    name: str
    subsections: dict[str, Subsection] = field(default_factory=dict)
    items: list[Item] = field(default_factory=list)
    # (header line, row of the header it repeats) for back-to-back subsection headers
    repeated_headers: list[tuple[Item, int]] = field(default_factory=list)
    raw_lines: list[tuple[int, str]] = field(default_factory=list)  # (row, line)

    def subsection(self, name: str, position: Position) -> Subsection:
        """Return the subsection called `name`, creating it on first sight."""
        sub = self.subsections.get(name)
        if sub is None:
            sub = Subsection(name=name, position=position)
            self.subsections[name] = sub
        return sub


@dataclass
class ParseResult:
    sections: dict[str, Section] = field(default_factory=dict)
    tokens: list[BracketToken] = field(default_factory=list)

    def find_section(self, name: str) -> Optional[Section]:
        """Case-insensitive lookup; first section in file order wins."""
        key = name.lower()
        for section_name, section in self.sections.items():
            if section_name.lower() == key:
                return section
        return None


# ---------------------------------------------------------------------------
# Lint findings
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LintError(ABC):
    """Base record for a single finding; subclasses supply `message`."""
    file_path: str
    position: Position

    kind = "lint"

    @property
    @abstractmethod
    def message(self) -> str:
        ...

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "row": self.position.row,
            "col": self.position.col,
            "message": self.message,
        }

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class BalanceError(LintError):
    variant: str  # unmatched | mismatched | unclosed
    char: str
    opened_at: Optional[Position] = None  # mismatched only
    expected: Optional[str] = None  # mismatched only

    kind = "balance"

    @property
    def message(self) -> str:
        where = self.position.at(self.file_path)
        if self.variant == "unmatched":
            return f"Unmatched closing '{self.char}' at {where}"
        if self.variant == "mismatched":
            return (
                f"Mismatched closing '{self.char}' at {where}, expecting "
                f"'{self.expected}' to match opening at {self.opened_at.at(self.file_path)}"
            )
        return f"Unclosed '{self.char}' opened at {where}"


@dataclass(frozen=True)
class DuplicateEntryError(LintError):
    scope: str  # "section" or "section.subsection"
    text: str
    first_row: int

    kind = "duplicate"

    @property
    def message(self) -> str:
        return (
            f"{self.file_path}:{self.position.row} Duplicate entry in section "
            f"'{self.scope}': \"{self.text}\" (first at {self.scope}:{self.first_row})"
        )


@dataclass(frozen=True)
class UnresolvedTokenError(LintError):
    variant: str  # unknown_prefix | suffix_not_found | unknown_section
    token: str
    prefix: Optional[str] = None
    suffix: Optional[str] = None

    kind = "unresolved_token"

    @property
    def message(self) -> str:
        where = self.position.at(self.file_path)
        if self.variant == "unknown_prefix":
            return (
                f"{where} Unknown token prefix '[{self.token}]' — "
                f"no top-level section named '{self.prefix}'"
            )
        if self.variant == "suffix_not_found":
            return (
                f"{where} Unresolved token '[{self.token}]' — prefix '{self.prefix}' "
                f"exists but suffix '{self.suffix}' not found"
            )
        return f"{where} Unresolved token '[{self.token}]' — no section named '{self.token}'"
