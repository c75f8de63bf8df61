"""Safe navigation over decoded JSON-RPC documents.

Paths are dotted strings such as ``"result.transaction.signatures.0"``. Integer
segments index into lists, everything else indexes into dicts. Any missing
segment, wrong container type or out-of-range index resolves to ``None``.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, List, Optional, Tuple, Union

Segment = Union[str, int]


@lru_cache(maxsize=256)
def split_path(path: str) -> Tuple[Segment, ...]:
    segments: List[Segment] = []
    for part in path.split("."):
        segments.append(int(part) if part.isdigit() else part)
    return tuple(segments)


def lookup(node: Any, path: str) -> Any:
    current = node
    for segment in split_path(path):
        if isinstance(segment, int):
            if not isinstance(current, list) or segment >= len(current):
                return None
            current = current[segment]
        else:
            if not isinstance(current, dict):
                return None
            current = current.get(segment)
        if current is None:
            return None
    return current


def lookup_str(node: Any, path: str) -> Optional[str]:
    value = lookup(node, path)
    return value if isinstance(value, str) else None


def lookup_uint(node: Any, path: str) -> Optional[int]:
    value = lookup(node, path)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return None
    return value


def lookup_list(node: Any, path: str) -> Optional[List[Any]]:
    value = lookup(node, path)
    return value if isinstance(value, list) else None


def last_field(path: str) -> str:
    """Name of the innermost non-index segment, e.g. ``blockTime``."""
    for segment in reversed(split_path(path)):
        if isinstance(segment, str):
            return segment
    return path
