# paf_premise/utils/accessors.py
"""
Field accessors for PAF address records.

Records reach us in two shapes:
- raw mappings (a CSV row, a decoded JSON object, a partial dict in tests)
- `Address` models (or anything exposing the same attributes)

Everything here reads through `extract()` so the formatter never has to care
which one it was handed. Missing values come back as "" rather than None;
emptiness is the only "absent" signal downstream.
"""

from collections.abc import Mapping
from typing import Any, List, Literal, Union

EmptyString = Literal[""]

_TRUTHY = {"1", "true", "t", "yes", "y", "on"}
_FALSY = {"0", "false", "f", "no", "n", "off", ""}


def _raw(record: Any, elem: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(elem)
    return getattr(record, elem, None)


def extract(record: Any, elem: str) -> str:
    """
    Return `elem` from `record` as a string.

    None / missing -> "".  Non-string scalars are passed through str().
    """
    value = _raw(record, elem)
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def extract_integer(record: Any, elem: str) -> Union[int, EmptyString]:
    """Return `elem` as an int, or "" if missing or not an integer."""
    value = _raw(record, elem)
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return ""


def extract_float(record: Any, elem: str) -> Union[float, EmptyString]:
    """Return `elem` as a float, or "" if missing or unparsable."""
    value = _raw(record, elem)
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip())
    except ValueError:
        return ""


def parse_flag(value: Any) -> bool:
    """
    Interpret a boolean-ish value.

    Raises:
        ValueError: for strings that are neither truthy nor falsy
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUTHY:
            return True
        if lowered in _FALSY:
            return False
        raise ValueError(f"Cannot interpret {value!r} as a boolean")
    return bool(value)


def extract_flag(record: Any, elem: str, default: bool = False) -> bool:
    """Return `elem` as a bool, falling back to `default` when missing."""
    value = _raw(record, elem)
    if value is None:
        return default
    return parse_flag(value)


def is_empty(s: Any) -> bool:
    """True for None, "" and whitespace-only strings."""
    if s is None:
        return True
    return len(str(s).strip()) == 0


def last_elem(a: List[str]) -> str:
    return a[-1] if a else ""


def prepend_locality(localities: List[str], premise: str) -> None:
    """
    Attach `premise` to the start of the most specific locality.

    Localities are held low-to-high specificity, so the most specific one is
    the last element (it prints first). With no localities, `premise` becomes
    the only element. Mutates `localities` in place.
    """
    if not localities:
        localities.append(premise)
        return
    localities[-1] = f"{premise} {last_elem(localities)}"
