"""Bracket balance check for (), {} and [] across a whole config file.

Only the first problem in scan order is reported: an unmatched or mismatched
closer as soon as it is seen, otherwise the most recently opened bracket that
is still open at end of file.
"""

from __future__ import annotations

from typing import Optional

from cfglint.models import BalanceError, Position
from cfglint.structure import split_lines

OPEN = {"(": ")", "{": "}", "[": "]"}
CLOSE = {")": "(", "}": "{", "]": "["}


def check_balance(text: str, file_path: str) -> Optional[BalanceError]:
    """Return the first bracket error in `text`, or None when balanced."""
    stack: list[tuple[str, Position]] = []

    for row, line in enumerate(split_lines(text), start=1):
        for col, ch in enumerate(line, start=1):
            if ch in OPEN:
                stack.append((ch, Position(row, col)))
            elif ch in CLOSE:
                here = Position(row, col)
                if not stack:
                    return BalanceError(file_path, here, variant="unmatched", char=ch)
                opener, opened_at = stack.pop()
                if opener != CLOSE[ch]:
                    return BalanceError(
                        file_path, here,
                        variant="mismatched", char=ch,
                        opened_at=opened_at, expected=OPEN[opener],
                    )

    if stack:
        opener, opened_at = stack[-1]
        return BalanceError(file_path, opened_at, variant="unclosed", char=opener)
    return None
