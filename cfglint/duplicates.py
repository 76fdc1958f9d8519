"""Duplicate entry detection within each section and each subsection."""

from __future__ import annotations

from cfglint.models import DuplicateEntryError, Item, ParseResult


def _scan_scope(items: list[Item], scope: str, file_path: str) -> list[DuplicateEntryError]:
    seen: dict[str, int] = {}
    errors = []
    for item in items:
        key = item.normalized
        if key in seen:
            errors.append(DuplicateEntryError(
                file_path, item.position,
                scope=scope, text=item.text, first_row=seen[key],
            ))
        else:
            seen[key] = item.position.row
    return errors


def detect_duplicates(parsed: ParseResult, file_path: str) -> list[DuplicateEntryError]:
    """Case- and whitespace-insensitive repeats, one scope at a time.

    A section's own items and each of its subsections are separate scopes,
    so the same text under `drinks` and `drinks.hot` is not a duplicate.
    A subsection header line repeated while that subsection is still the
    active one (`  coffee` twice in a row under `drinks`) is reported in the
    section's scope, after its own items. Reopening a section or switching
    back to an earlier subsection is not a duplicate.
    """
    errors: list[DuplicateEntryError] = []
    for section_name, section in parsed.sections.items():
        errors.extend(_scan_scope(section.items, section_name, file_path))
        for header, first_row in section.repeated_headers:
            errors.append(DuplicateEntryError(
                file_path, header.position,
                scope=section_name, text=header.text, first_row=first_row,
            ))
        for sub_name, sub in section.subsections.items():
            errors.extend(_scan_scope(sub.items, f"{section_name}.{sub_name}", file_path))
    return errors
