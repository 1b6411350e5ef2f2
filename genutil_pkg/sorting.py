"""
Deterministic key orderings for mappings.

One generic routine, sorted_keys(), covers every key type (str, int) and value
type (int, float, str, bool) for the key ordering, and numeric values for the
value orderings:

    >>> sorted_keys({"b": 1, "a": 2, "c": 3})
    ['a', 'b', 'c']
    >>> sorted_keys({"x": 3.0, "y": 1.0, "z": 2.0}, SortOrder.BY_VALUE_ASCENDING)
    ['y', 'z', 'x']
    >>> sorted_keys({"p": -5.0, "q": 3.0, "r": -4.0}, "ByValueAbsDescending")
    ['p', 'r', 'q']

Sorting is stable: keys whose sort values tie keep the mapping's iteration
order, for descending orderings too.
"""

import re
from enum import Enum
from operator import itemgetter
from typing import Any, Callable, Dict, Hashable, Iterable, List, Mapping, Tuple, Union


class SortOrder(Enum):
    """Ordering rule applied by sorted_keys()."""
    BY_KEY_ASCENDING = "key"
    BY_VALUE_ASCENDING = "value"
    BY_VALUE_ABS_ASCENDING = "abs_value"
    BY_VALUE_DESCENDING = "value_desc"
    BY_VALUE_ABS_DESCENDING = "abs_value_desc"

    @classmethod
    def _missing_(cls, value):
        """
        Allow flexible names.

        Supports:
        - member names in any case: SortOrder('by_value_descending')
        - CamelCase rule names: SortOrder('ByValueAbsDescending')
        - short aliases: 'value_asc', 'abs', 'abs_desc', 'desc'
        """
        text = str(value).strip()
        # ByValueAbsDescending -> by_value_abs_descending
        normalized = re.sub(r'(?<=[a-z0-9])(?=[A-Z])', '_', text).lower().replace('-', '_').replace(' ', '_')

        for member in cls:
            if member.name.lower() == normalized:
                return member

        aliases = {
            'key_asc': cls.BY_KEY_ASCENDING,
            'keys': cls.BY_KEY_ASCENDING,
            'value_asc': cls.BY_VALUE_ASCENDING,
            'asc': cls.BY_VALUE_ASCENDING,
            'abs': cls.BY_VALUE_ABS_ASCENDING,
            'abs_asc': cls.BY_VALUE_ABS_ASCENDING,
            'abs_value_asc': cls.BY_VALUE_ABS_ASCENDING,
            'desc': cls.BY_VALUE_DESCENDING,
            'abs_desc': cls.BY_VALUE_ABS_DESCENDING,
        }
        if normalized in aliases:
            return aliases[normalized]

        raise ValueError(
            f"'{value}' is not a valid {cls.__name__}. "
            f"Supported orders: {', '.join(m.name for m in cls)}"
        )


def _abs_value(item: Tuple[Any, Any]):
    return abs(item[1])


# order -> (sort key over (key, value) pairs, reverse)
_ORDERINGS: Dict[SortOrder, Tuple[Callable, bool]] = {
    SortOrder.BY_KEY_ASCENDING: (itemgetter(0), False),
    SortOrder.BY_VALUE_ASCENDING: (itemgetter(1), False),
    SortOrder.BY_VALUE_ABS_ASCENDING: (_abs_value, False),
    SortOrder.BY_VALUE_DESCENDING: (itemgetter(1), True),
    SortOrder.BY_VALUE_ABS_DESCENDING: (_abs_value, True),
}


def sorted_keys(
    mapping: Mapping[Hashable, Any],
    order: Union[SortOrder, str] = SortOrder.BY_KEY_ASCENDING
) -> List[Hashable]:
    """
    Return the keys of a mapping ordered by the given rule.

    Args:
        mapping: Mapping to project; it is not modified
        order: SortOrder member or any name SortOrder() accepts

    Returns:
        List holding every key of the mapping exactly once

    Raises:
        ValueError: If order is not a recognized ordering
        TypeError: If the keys (key order) or values (value orders) are not
            mutually comparable

    Example:
        >>> sorted_keys({3: "c", 1: "a", 2: "b"})
        [1, 2, 3]
    """
    sort_key, reverse = _ORDERINGS[SortOrder(order)]
    items = list(mapping.items())
    items.sort(key=sort_key, reverse=reverse)
    return [key for key, _ in items]


def unique_keys(*sequences: Iterable[Hashable]) -> List[Hashable]:
    """Union of all items across the sequences, in first-seen order."""
    # dict preserves insertion order and drops repeats
    return list(dict.fromkeys(item for sequence in sequences for item in sequence))


def sorted_unique_keys(*sequences: Iterable[Hashable]) -> List[Hashable]:
    """
    Sorted union of all items across the sequences.

    Example:
        >>> sorted_unique_keys(["b", "a"], ["c", "a"])
        ['a', 'b', 'c']
    """
    return sorted(unique_keys(*sequences))
