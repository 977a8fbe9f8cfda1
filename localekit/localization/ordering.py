"""Deterministic key ordering for written locale files."""

import json
import unicodedata
from typing import Any, Dict, Tuple

from .values import is_mapping


def collation_key(key: str) -> Tuple[str, str]:
    """Locale-aware sort key.

    Accent and case insensitive first. Ties put lowercase before uppercase,
    so ``ab`` < ``aB`` < ``b`` < ``B``.
    """
    folded = unicodedata.normalize("NFKD", key)
    folded = "".join(c for c in folded if not unicodedata.combining(c)).casefold()
    return folded, key.swapcase()


def sort_document(obj: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``obj`` with scalar keys first, nested objects last.

    Both groups are sorted alphabetically and nested objects are sorted
    recursively. Arrays count as scalars and keep their element order.
    """
    scalars = []
    nested = []

    for key, value in obj.items():
        if is_mapping(value):
            nested.append((key, sort_document(value)))
        else:
            scalars.append((key, value))

    scalars.sort(key=lambda item: collation_key(item[0]))
    nested.sort(key=lambda item: collation_key(item[0]))

    return dict(scalars + nested)


def dump_document(obj: Dict[str, Any], indent: int = 2) -> str:
    """Serialize ``obj`` in its normalized key order."""
    return json.dumps(sort_document(obj), indent=indent, ensure_ascii=False)
