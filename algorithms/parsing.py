"""
parsing.py — Free-form number input
===================================
"5, 3 8,1" → [5, 3, 8, 1].  Tokens are split on whitespace and commas;
anything that does not parse as a finite number (NaN and the infinities
too) is dropped silently.
Integers stay ints so descriptions read "5", not "5.0".
"""

import math
import re
from typing import List

from algorithms.step import Number


_SEPARATORS = re.compile(r"[\s,]+")


def parse_number(token: str):
    """Return the token as int / float, or None if it isn't a usable number."""
    try:
        return int(token)
    except ValueError:
        pass
    try:
        value = float(token)
    except ValueError:
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def parse_numbers(text: str) -> List[Number]:
    values = []
    for token in _SEPARATORS.split(text or ""):
        if not token:
            continue
        value = parse_number(token)
        if value is not None:
            values.append(value)
    return values
