"""Override values: either leave a setting alone or set it to a concrete value."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class DontChange(Enum):
    """Sentinel type for an override that leaves the current setting untouched."""

    DONT_CHANGE = "dont_change"

    def __repr__(self) -> str:
        return "DONT_CHANGE"


DONT_CHANGE = DontChange.DONT_CHANGE


@dataclass(frozen=True)
class SetValue:
    """An override that sets a concrete value."""

    value: Any


OverrideValue = Union[DontChange, SetValue]


def is_set(override: OverrideValue) -> bool:
    """Check if an override carries a concrete value."""
    return isinstance(override, SetValue)
