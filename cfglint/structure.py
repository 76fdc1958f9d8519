"""Heuristic structural parser for the indentation-based config format.

There is no formal grammar; the hierarchy is inferred from leading spaces:

  drinks              <- unindented line: section header (first word)
    hot               <- two spaces, identifier-like: subsection
    coffee, black     <- two spaces, anything else: item
      espresso        <- four or more spaces: item of the active scope

Every `[...]` occurrence on any line is also collected as a bracket token
for cross-reference resolution.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from cfglint.models import BracketToken, Item, ParseResult, Position, Section, Subsection

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

TOP_LEVEL_RE = re.compile(r"\S")
SECOND_LEVEL_RE = re.compile(r" {2}(\S.*)")
NESTED_RE = re.compile(r" {4,}(\S.*)")
BRACKET_TOKEN_RE = re.compile(r"\[([^\]]+)\]")

# One or two identifier-ish words: letters, digits, underscore, hyphen, apostrophe.
SUBSECTION_RE = re.compile(r"[A-Za-z0-9_\-']+(\s[A-Za-z0-9_\-']+)?")


def split_lines(text: str) -> list[str]:
    """Split on LF, dropping the CR of CRLF endings."""
    return [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]


def looks_like_subsection(content: str) -> bool:
    """Classify trimmed two-space-indented content as a subsection header.

    Deliberately loose: a short two-word item such as `red shoes` is also
    classified as a subsection, and name resolution relies on that.
    """
    if "," in content or "|" in content or content.startswith("["):
        return False
    if len(content.split(" ")) > 4:
        return False
    return SUBSECTION_RE.fullmatch(content) is not None


def extract_bracket_tokens(line: str, row: int, file_path: str) -> list[BracketToken]:
    return [
        BracketToken(token=m.group(1), position=Position(row, m.start() + 1), file_path=file_path)
        for m in BRACKET_TOKEN_RE.finditer(line)
    ]


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


@dataclass
class ParseCursor:
    """Where the next indented line attaches."""
    section: Optional[Section] = None
    subsection: Optional[Subsection] = None
    header: Optional[Item] = None  # line that opened the current subsection

    def open_section(self, result: ParseResult, name: str) -> Section:
        section = result.sections.get(name)
        if section is None:
            section = Section(name=name)
            result.sections[name] = section
        self.section = section
        self.subsection = None
        self.header = None
        return section

    def open_subsection(self, name: str, header: Item):
        """Enter subsection `name`; a header repeating the current one is recorded."""
        repeats = (
            self.subsection is not None
            and self.subsection.name == name
            and self.header.normalized == header.normalized
        )
        if repeats:
            self.section.repeated_headers.append((header, self.header.position.row))
            return
        self.subsection = self.section.subsection(name, header.position)
        self.header = header

    def attach(self, item: Item):
        if self.subsection is not None:
            self.subsection.items.append(item)
        else:
            self.section.items.append(item)


def _item(line: str, content: str, row: int) -> Item:
    indent = len(line) - len(line.lstrip(" "))
    return Item(text=content, position=Position(row, indent + 1))


def parse_structure(text: str, file_path: str) -> ParseResult:
    """Build the section/subsection/item hierarchy and collect bracket tokens."""
    result = ParseResult()
    cursor = ParseCursor()

    for row, line in enumerate(split_lines(text), start=1):
        result.tokens.extend(extract_bracket_tokens(line, row, file_path))

        if TOP_LEVEL_RE.match(line):
            name = line.strip().split()[0]
            section = cursor.open_section(result, name)
            section.raw_lines.append((row, line))
            continue

        m = SECOND_LEVEL_RE.fullmatch(line)
        if m:
            if cursor.section is None:
                continue
            content = m.group(1).strip()
            if looks_like_subsection(content):
                cursor.open_subsection(content.split()[0], _item(line, content, row))
            else:
                cursor.attach(_item(line, content, row))
            continue

        m = NESTED_RE.fullmatch(line)
        if m and cursor.section is not None:
            cursor.attach(_item(line, m.group(1).strip(), row))

    return result
