#!/usr/bin/env python3
"""Structural linter for indentation-based config files.

Checks, per file:
  1. Brackets (), {}, [] are balanced (a failure here stops the file)
  2. No duplicate entries inside a section or subsection (case-insensitive)
  3. Bracket tokens such as [closet.indoors] resolve to a section,
     subsection or item (template tokens like [input.x] are skipped)

Usage:
  python -m cfglint.lint_config path/to/config.txt [other-files...] \\
    [--report output/lint_report.json] \\
    [--verbose]

Exit code 0 if every file is valid, 1 if any file has errors or is missing,
2 for usage errors.
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

from cfglint.balance import check_balance
from cfglint.duplicates import detect_duplicates
from cfglint.models import LintError
from cfglint.structure import parse_structure
from cfglint.tokens import validate_tokens

TOOL_NAME = "cfglint"

VERBOSE = False


def log(msg: str, level: str = "INFO"):
    if not VERBOSE:
        return
    timestamp = datetime.now().strftime("%H:%M:%S")
    print(f"[{timestamp}] [{level}] {msg}", file=sys.stderr, flush=True)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass
class LintResult:
    path: str
    errors: list[LintError] = field(default_factory=list)
    failure: Optional[str] = None  # file-level problem: missing, unreadable

    @property
    def ok(self) -> bool:
        return self.failure is None and not self.errors

    @property
    def messages(self) -> list[str]:
        if self.failure is not None:
            return [self.failure]
        return [e.message for e in self.errors]

    def summary(self) -> str:
        if self.ok:
            return f"OK: {self.path}"
        if self.failure is not None:
            return self.failure
        lines = [f"Errors in {self.path}:"]
        for msg in self.messages:
            lines.append(f"  - {msg}")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "ok": self.ok,
            "errors": [e.to_dict() for e in self.errors],
            "failure": self.failure,
        }


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


def check_text(text: str, file_path: str) -> list[LintError]:
    """Run balance, then duplicate and token checks, on one file's text."""
    balance = check_balance(text, file_path)
    if balance is not None:
        return [balance]

    parsed = parse_structure(text, file_path)
    log(f"{file_path}: {len(parsed.sections)} sections, {len(parsed.tokens)} bracket tokens")

    errors: list[LintError] = []
    errors.extend(detect_duplicates(parsed, file_path))
    errors.extend(validate_tokens(parsed))
    return errors


def read_config(path: Path) -> str:
    # newline="" keeps a lone CR on its line; CRLF is handled by split_lines.
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def check_file(file_arg: str) -> LintResult:
    resolved = Path(file_arg).resolve()
    result = LintResult(path=str(resolved))

    if not resolved.exists():
        result.failure = f"File not found: {resolved}"
        return result
    try:
        text = read_config(resolved)
    except (OSError, UnicodeDecodeError) as e:
        result.failure = f"Could not read {resolved}: {e}"
        return result

    result.errors = check_text(text, str(resolved))
    return result


def write_report(path: str, results: list[LintResult]):
    report = {
        "tool": TOOL_NAME,
        "valid": all(r.ok for r in results),
        "files": [r.to_dict() for r in results],
    }
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    with open(out, "w", encoding="utf-8") as f:
        json.dump(report, f, ensure_ascii=False, indent=2)


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=TOOL_NAME,
        description="Check config files for bracket balance, duplicate entries and unresolved tokens.",
    )
    parser.add_argument("files", nargs="*", metavar="FILE", help="Config file(s) to lint")
    parser.add_argument("--report", help="Write a JSON lint report to this path")
    parser.add_argument("--verbose", action="store_true", help="Log progress to stderr")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    global VERBOSE

    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.files:
        parser.error("at least one config file is required")
    VERBOSE = args.verbose

    results = []
    for file_arg in args.files:
        log(f"Checking {file_arg}")
        result = check_file(file_arg)
        results.append(result)
        if result.ok:
            print(result.summary())
        else:
            print(result.summary(), file=sys.stderr)

    if args.report:
        write_report(args.report, results)
        log(f"Report written to {args.report}")

    return 0 if all(r.ok for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())
