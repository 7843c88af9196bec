import math
import re
from dataclasses import dataclass, field
from typing import Any, List, Sequence


DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")


@dataclass
class Page:
    data: List[Any] = field(default_factory=list)
    total: int = 0
    page: int = DEFAULT_PAGE
    total_pages: int = 1


def parse_int(value, default: int) -> int:
    """
    Lenient integer parse: "3", " 3", "3abc" -> 3.
    Missing, unparsable or zero values give `default`.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return default
        parsed = int(value)
    else:
        match = _INT_PREFIX.match(str(value))
        if not match:
            return default
        parsed = int(match.group(1))
    return parsed or default


def paginate(items: Sequence[Any], page=DEFAULT_PAGE, limit=DEFAULT_LIMIT) -> Page:
    """Return the 1-based `page` of `items`, `limit` per page."""
    p = max(parse_int(page, DEFAULT_PAGE), 1)
    l = max(parse_int(limit, DEFAULT_LIMIT), 1)
    start = (p - 1) * l
    total = len(items)
    return Page(
        data=list(items[start:start + l]),
        total=total,
        page=p,
        total_pages=max(math.ceil(total / l), 1),
    )


def filter_by_substring(items: Sequence[dict], key: str, needle) -> List[dict]:
    """Case-insensitive substring filter on one field. Empty needle keeps everything."""
    s = str(needle or "").strip().lower()
    if not s:
        return list(items)
    return [item for item in items if s in str(item.get(key) or "").lower()]
