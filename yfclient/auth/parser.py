"""Hidden form field extraction for the consent page."""

import re
from functools import lru_cache
from typing import Dict, Iterable, Pattern, Tuple


@lru_cache(maxsize=32)
def _input_patterns(name: str) -> Tuple[Pattern, Pattern]:
    escaped = re.escape(name)
    name_first = re.compile(
        rf"""<input[^>]*\bname=["']{escaped}["'][^>]*\bvalue=["']([^"']*)["']""",
        re.IGNORECASE,
    )
    value_first = re.compile(
        rf"""<input[^>]*\bvalue=["']([^"']*)["'][^>]*\bname=["']{escaped}["']""",
        re.IGNORECASE,
    )
    return name_first, value_first


def extract_input_value(html: str, name: str) -> str:
    """Return the value of the ``<input>`` named ``name``, or "" if absent.

    Attribute order (name before value or after) and quote style are both
    tolerated.
    """
    if not html:
        return ""

    for pattern in _input_patterns(name):
        match = pattern.search(html)
        if match:
            return match.group(1)
    return ""


def extract_input_values(html: str, names: Iterable[str]) -> Dict[str, str]:
    """Extract several named inputs at once; missing ones map to ""."""
    return {name: extract_input_value(html, name) for name in names}
