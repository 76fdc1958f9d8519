"""Cross-reference resolution for bracket tokens such as `[closet.indoors]`.

A dotted token `[prefix.suffix]` resolves when a section named `prefix`
exists (any case) and `suffix` names one of its subsections, or is the start
of one of its items (top-level first, then inside subsections). An undotted
token must name a section.

Some tokens are template syntax rather than references (`[input.size]`,
`[a?.b]`, `[RANDOM_X]`, `[x|y]`) and are never flagged.
"""

from __future__ import annotations

import re
from typing import Optional

from cfglint.models import BracketToken, ParseResult, Section, UnresolvedTokenError

SKIP_PREFIXES = ("input.", "random", "canonical")
SKIP_SUBSTRINGS = ("?.", "(", ")", "|", "{", "}")
CONSTANT_RE = re.compile(r"^[A-Z0-9_]+$")


def is_exempt_token(tok: str) -> bool:
    """True for template tokens that are never resolved."""
    tok = tok.strip()
    if tok.startswith(SKIP_PREFIXES):
        return True
    if any(s in tok for s in SKIP_SUBSTRINGS):
        return True
    return CONSTANT_RE.match(tok) is not None


def _suffix_in_section(section: Section, suffix: str) -> bool:
    for name in section.subsections:
        if name.lower() == suffix:
            return True
    for item in section.items:
        if item.normalized.startswith(suffix):
            return True
    for sub in section.subsections.values():
        for item in sub.items:
            if item.normalized.startswith(suffix):
                return True
    return False


def resolve_token(token: BracketToken, parsed: ParseResult) -> Optional[UnresolvedTokenError]:
    """Return an error when `token` refers to nothing in `parsed`."""
    tok = token.token.strip()
    if is_exempt_token(tok):
        return None

    if "." in tok:
        # Only the first two dot-separated segments are compared.
        prefix, suffix = (part.strip().lower() for part in tok.split(".")[:2])
        section = parsed.find_section(prefix)
        if section is None:
            return UnresolvedTokenError(
                token.file_path, token.position,
                variant="unknown_prefix", token=tok, prefix=prefix,
            )
        if not _suffix_in_section(section, suffix):
            return UnresolvedTokenError(
                token.file_path, token.position,
                variant="suffix_not_found", token=tok, prefix=prefix, suffix=suffix,
            )
        return None

    if parsed.find_section(tok) is None:
        return UnresolvedTokenError(
            token.file_path, token.position, variant="unknown_section", token=tok,
        )
    return None


def validate_tokens(parsed: ParseResult) -> list[UnresolvedTokenError]:
    errors = []
    for token in parsed.tokens:
        err = resolve_token(token, parsed)
        if err is not None:
            errors.append(err)
    return errors
