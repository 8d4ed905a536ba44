import re
from typing import Any, Iterable, List, Optional

from ..enum.stock_enum import ADULT_SIZES, CHILDREN_SIZES, GROWTH_SIZES

LEADING_INT_PATTERN = re.compile(r"^\s*([+-]?\d+)")


def normalize_color_id(value: Any) -> Optional[int]:
    """
    Color ids are positive integers. None, 0, negatives and garbage all mean
    "no color" and come back as None. Strings are parsed up to the first
    non-digit ("12abc" -> 12).
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        match = LEADING_INT_PATTERN.match(value)
        if not match:
            return None
        num = int(match.group(1))
    else:
        try:
            num = int(value)
        except (TypeError, ValueError, OverflowError):
            return None

    return num if num > 0 else None


def extract_size_number(size_code: Optional[str]) -> str:
    # "92 - 2 years" -> "92", "XL" -> "XL"
    if not size_code:
        return ""
    return size_code.split(" ")[0].strip()


def normalize_size_code(size_code: Optional[str]) -> str:
    if not size_code:
        return ""
    trimmed = size_code.strip()
    if trimmed in GROWTH_SIZES:
        return trimmed
    return extract_size_number(trimmed)


def is_children_size(size_code: str) -> bool:
    return extract_size_number(size_code) in CHILDREN_SIZES


def size_sort_key(size_code: str, children: bool = False):
    if children:
        number = extract_size_number(size_code)
        if number in CHILDREN_SIZES:
            return (0, CHILDREN_SIZES.index(number), "")
        return (1, int(number) if number.isdigit() else 0, size_code)

    upper = size_code.upper()
    if upper in ADULT_SIZES:
        return (0, ADULT_SIZES.index(upper), "")
    return (1, 0, size_code)


def sort_sizes(sizes: Iterable[str], children: bool = False) -> List[str]:
    return sorted(sizes, key=lambda s: size_sort_key(s, children))
