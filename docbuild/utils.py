"""Small helpers shared across docbuild modules."""

from __future__ import annotations

import re
from enum import Enum
from typing import Union

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_SEPARATORS = re.compile(r"[\s\-.]+")


def normalise_identifier(value: Union[str, Enum]) -> str:
    """Return the snake_case form of a layout or kind identifier.

    ``MemberSummary``, ``memberSummary`` and ``member-summary`` all normalise to
    ``member_summary`` so layouts written in the javadoc XML spelling keep working.
    """
    raw = value.value if isinstance(value, Enum) else value
    text = str(raw).strip()
    text = _CAMEL_BOUNDARY.sub("_", text)
    text = _SEPARATORS.sub("_", text)
    return re.sub(r"_+", "_", text).strip("_").lower()


__all__ = ["normalise_identifier"]
