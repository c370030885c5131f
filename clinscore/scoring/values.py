"""
Input Values
============

A user-supplied answer is a plain Python value tagged by its type:

    bool          -> boolean checkbox
    int / float   -> numeric entry (bool is *not* a number here)
    str           -> dropdown/category selection

Author: ClinScore Team
Version: 1.0.0
"""

import math
from typing import Any, Mapping, Optional, Union

InputValue = Union[bool, float, str]

Inputs = Mapping[str, InputValue]


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def is_number(value: Any) -> bool:
    # bool subclasses int; a checkbox is never a measurement
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_category(value: Any) -> bool:
    return isinstance(value, str)


def as_number(value: Any) -> Optional[float]:
    """
    Return the value as a float, or None if it is not numeric.

    Integers beyond float range become infinity of the same sign, so callers
    only need a finiteness check.
    """
    if is_number(value):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    return None


def kind_name(value: Any) -> str:
    """Human-readable kind of a supplied value, for error messages."""
    if is_boolean(value):
        return "boolean"
    if is_number(value):
        return "number"
    if is_category(value):
        return "category"
    return type(value).__name__
