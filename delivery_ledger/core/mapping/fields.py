"""
Field-level mapping rules for form answers.
"""

from collections.abc import Mapping
from typing import Any

DEFAULT_QUANTITY_TOKENS: Mapping[str, int] = {"הלוך": 1, "הלוך-חזור": 2}


def as_text(value: Any) -> str:
    """
    Cell value as stripped text; None becomes "".

    Whole floats lose their ".0" so numeric IDs typed into the form keep
    the digits the driver entered.
    """
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def map_quantity(token: Any, tokens: Mapping[str, int] = DEFAULT_QUANTITY_TOKENS) -> int | str:
    """
    Map the trip-type answer to a quantity.

    Exact match after stripping surrounding whitespace; anything not
    recognized maps to "" rather than failing.
    """
    return tokens.get(as_text(token), "")


def build_description(origin: Any, destination: Any, template: str = "מ{origin} ל{destination}") -> str:
    """Description column text built from the "from" and "to" answers."""
    return template.format(origin=as_text(origin), destination=as_text(destination))
