"""Locale reduction: collapse per-locale field maps to one value.

Content records carry localized fields as ``{locale: value}`` maps. Agents
rarely need every translation, so read operations reduce each map to a
single representative value unless the caller asks for all locales.

Selection rule for one map:

1. The first locale (in declaration order) whose value is non-empty wins.
   Empty means ``None``, an empty collection, or a string that is empty
   or only whitespace.
2. If every value is empty, the first locale whose value is not ``None``
   wins (so ``""`` or ``[]`` is returned rather than ``None``).
3. If every value is ``None``, the result is ``None``.

When the project's ``locales`` are known, only maps keyed exclusively by
those locales are reduced, and they are reduced in that order. Without
them, any map keyed by locale-shaped tags qualifies and the map's own key
order stands in for the declaration order.

The rule is applied recursively: blocks, single-block fields, structured
text nodes and embedded record previews are reduced wherever a locale map
appears. The input is never mutated.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

# Two-letter language code, optionally followed by a 2-3 letter region
# ("en", "en-US", "pt-br").
LOCALE_PATTERN = re.compile(r"^[a-z]{2}(?:-[a-zA-Z]{2,3})?$")

# Keys that look like locale tags but are record metadata. A project that
# really uses these as locales must pass ``locales`` explicitly.
_AMBIGUOUS_KEYS = frozenset({"id"})


def is_empty(value: Any) -> bool:
    """Natural emptiness test: ``None``, blank strings, empty collections."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def is_locale_map(value: Any, locales: Sequence[str] | None = None) -> bool:
    """True when *value* is a non-empty mapping keyed only by locale tags."""
    if not isinstance(value, Mapping) or not value:
        return False
    keys = list(value.keys())
    if not all(isinstance(k, str) for k in keys):
        return False
    if locales is not None:
        declared = set(locales)
        return all(k in declared for k in keys)
    return all(LOCALE_PATTERN.match(k) and k not in _AMBIGUOUS_KEYS for k in keys)


def contains_locale_map(node: Any, locales: Sequence[str] | None = None) -> bool:
    """True when a locale map appears anywhere inside *node*."""
    if isinstance(node, Mapping):
        if is_locale_map(node, locales):
            return True
        return any(contains_locale_map(value, locales) for value in node.values())
    if isinstance(node, (list, tuple)):
        return any(contains_locale_map(item, locales) for item in node)
    return False


def pick_locale_value(values: Mapping[str, Any], locales: Sequence[str] | None = None) -> Any:
    """Select the representative value of one locale map."""
    order = [loc for loc in locales if loc in values] if locales else list(values)
    for loc in order:
        if not is_empty(values[loc]):
            return values[loc]
    for loc in order:
        if values[loc] is not None:
            return values[loc]
    return None


def reduce_locales(
    record: Any,
    *,
    return_all_locales: bool = False,
    locales: Sequence[str] | None = None,
) -> Any:
    """Return a copy of *record* with every locale map reduced to one value.

    With ``return_all_locales=True`` the record is returned untouched.
    """
    if return_all_locales:
        return record
    return _reduce(record, locales)


def _reduce(node: Any, locales: Sequence[str] | None) -> Any:
    if isinstance(node, Mapping):
        if is_locale_map(node, locales):
            return _reduce(pick_locale_value(node, locales), locales)
        return {key: _reduce(value, locales) for key, value in node.items()}
    if isinstance(node, list):
        return [_reduce(item, locales) for item in node]
    if isinstance(node, tuple):
        return tuple(_reduce(item, locales) for item in node)
    return node
