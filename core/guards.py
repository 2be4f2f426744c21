# core/guards.py
from __future__ import annotations

import re
from typing import Any

OTHER_OPTION = 7
OTHER_MIN_LENGTH = 5
OTHER_MAX_LENGTH = 50

_LINE_BREAKS_RE = re.compile(r"[\r\n\u2028\u2029]")


def _is_int(value: Any) -> bool:
    # bool is an int subclass; True must not count as option 1
    return isinstance(value, int) and not isinstance(value, bool)


def sanitize_other_input(value: Any) -> str:
    """
    Replace line breaks with spaces and clamp to the max length.
    Never trims: the draft keeps what the user typed.
    """
    if not isinstance(value, str):
        return ""
    return _LINE_BREAKS_RE.sub(" ", value)[:OTHER_MAX_LENGTH]


def is_valid_other_text(text: Any) -> bool:
    if not isinstance(text, str):
        return False
    trimmed = text.strip()
    if _LINE_BREAKS_RE.search(trimmed):
        return False
    return OTHER_MIN_LENGTH <= len(trimmed) <= OTHER_MAX_LENGTH


def is_valid_selection(n: Any) -> bool:
    return _is_int(n) and 1 <= n <= 6


def is_valid_option_id(n: Any) -> bool:
    return _is_int(n) and 1 <= n <= OTHER_OPTION