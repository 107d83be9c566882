# -*- encoding: utf-8 -*-
# @File   : datatype.py
# @Time   : 2024/10/13 14:02:51
# @Author : Kariko Lin

"""Strict conversion of raw property strings into typed values."""

from enum import Enum, auto
from re import compile as regex


class DataKind(Enum):
    STRING = auto()
    INTEGER = auto()
    DOUBLE = auto()
    NUMERIC = auto()
    BOOLEAN = auto()


class DataType(Enum):
    # (label, default value, *kinds). labels keep members from aliasing.
    STRING = ('string', '', DataKind.STRING)
    INTEGER = ('integer', 0, DataKind.INTEGER, DataKind.NUMERIC)
    EMAIL = ('email', '', DataKind.STRING)
    URL = ('url', '', DataKind.STRING)
    BOOLEAN = ('boolean', False, DataKind.BOOLEAN)
    DOUBLE = ('double', 0.0, DataKind.DOUBLE, DataKind.NUMERIC)
    INTEGER_PERCENTAGE = (
        'integer_percentage', 0, DataKind.INTEGER, DataKind.NUMERIC)
    DOUBLE_PERCENTAGE = (
        'double_percentage', 0.0, DataKind.DOUBLE, DataKind.NUMERIC)
    UNDEFINED = ('undefined', 'Undefined', DataKind.STRING)

    def __init__(self, label: str, default, *kinds: DataKind) -> None:
        self.label = label
        self.default_value = default
        self.kinds = frozenset(kinds)

    def is_of_kind(self, kind: DataKind) -> bool:
        if kind is None:
            raise ValueError('kind may not be None')
        return kind in self.kinds


_INTEGER = regex(r'[+-]?\d+')


def to_int(data: str) -> int:
    """Digits with an optional sign only. Blanks and `_` are rejected,
    though `int()` takes them."""
    if _INTEGER.fullmatch(data) is None:
        raise ValueError(f'invalid integer: {data!r}')
    return int(data)


def _to_bool(data: str) -> bool:
    # anything but a case-insensitive "true" is False.
    return data.strip().lower() == 'true'


_CONVERTERS = {
    DataType.STRING: str,
    DataType.INTEGER: to_int,
    DataType.INTEGER_PERCENTAGE: to_int,
    DataType.DOUBLE: float,
    DataType.DOUBLE_PERCENTAGE: float,
    DataType.BOOLEAN: _to_bool,
}


def to_comparable(data: str, data_type: DataType) -> str | int | float | bool:
    """Convert `data` into the Python value of `data_type`.

    Raises:
        ValueError: `data` isn't well-formed for the type.
        NotImplementedError: no conversion exists for the type,
            like `DataType.EMAIL`.
    """
    if data is None:
        raise ValueError('data may not be None')
    if data_type is None:
        raise ValueError('data_type may not be None')
    if data_type not in _CONVERTERS:
        raise NotImplementedError(
            f'Can not extract {data_type.name} from raw data {data}')
    return _CONVERTERS[data_type](data)
