"""
Text sanitization helpers.

Used to normalize the free-text metadata fields that arrive with an upload.
"""

from __future__ import annotations

import re
from typing import List, Optional


_CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


def clean_text_field(value: Optional[str], default: str, *, max_chars: Optional[int] = None) -> str:
    """
    Strip a form field and fall back to ``default`` when it is missing or blank.

    Control characters (except tab/newline) are removed. When ``max_chars`` is
    given the result is truncated to that length.
    """
    if value is None:
        return default
    cleaned = _CONTROL_CHARS_RE.sub("", str(value)).strip()
    if not cleaned:
        return default
    if max_chars is not None:
        cleaned = cleaned[:max_chars].rstrip()
    return cleaned


def parse_list_field(value: Optional[str]) -> List[str]:
    """
    Parse a comma-separated form field into a list.

    Entries are trimmed and empty entries are dropped, so ``None``, ``""`` and
    ``" , "`` all give ``[]``. No sentinel values are interpreted: the literal
    ``"default"`` parses to ``["default"]``.
    """
    if not value:
        return []
    items = []
    for part in str(value).split(","):
        part = _CONTROL_CHARS_RE.sub("", part).strip()
        if part:
            items.append(part)
    return items
