"""Concatenate ranked sections and apply the result limit."""

from __future__ import annotations

from itertools import chain, islice
from typing import Iterable, TypeVar

_T = TypeVar("_T")


def assemble(*sections: Iterable[_T], max_items: int = -1) -> list[_T]:
    """Join ``sections`` in priority order, keeping at most ``max_items``.

    A negative ``max_items`` means no limit.
    """
    joined = chain.from_iterable(sections)
    if max_items < 0:
        return list(joined)
    return list(islice(joined, max_items))
