# -*- encoding: utf-8 -*-
# @File   : namespace.py
# @Time   : 2024/10/12 21:03:17
# @Author : Kariko Lin

"""Composite keys partitioning a property store into independent scopes."""

from functools import total_ordering
from typing import Iterator

SEPARATOR = ':'


@total_ordering
class Namespace:
    """An immutable sequence of segments, e.g. `Namespace('db', 'primary')`.

    Identity is the *joined* id (`db:primary`), not the segment tuple.
    So `Namespace('a:b') == Namespace('a', 'b')` holds.
    """
    __slots__ = ('__segments', '__id', '__hash')

    def __init__(self, *segments: str) -> None:
        if any(i is None for i in segments):
            raise ValueError('segments may not be None')
        self.__segments: tuple[str, ...] = tuple(segments)
        # no segment at all gives '', callers are expected to avoid that.
        self.__id = SEPARATOR.join(self.__segments)
        self.__hash = hash(self.__id)

    @property
    def segments(self) -> tuple[str, ...]:
        return self.__segments

    @property
    def id(self) -> str:
        return self.__id

    def derive(self, segment: str) -> 'Namespace':
        """Return a new namespace with `segment` appended."""
        if segment is None:
            raise ValueError('segment may not be None')
        return Namespace(*self.__segments, segment)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__segments)

    def __hash__(self) -> int:
        return self.__hash

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if not isinstance(other, Namespace):
            return NotImplemented
        return other.id == self.__id

    def __lt__(self, other: 'Namespace') -> bool:
        if other is None:
            raise ValueError('namespace may not be None')
        if not isinstance(other, Namespace):
            return NotImplemented
        return self.__id < other.id

    def __str__(self) -> str:
        return self.__id

    def __repr__(self) -> str:
        return f'Namespace({self.__id!r})'


DEFAULT_NAMESPACE = Namespace('default_namespace_do_not_use_elsewhere ##$$%%')
