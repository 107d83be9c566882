import pytest

from pypropman import DataKind, DataType, to_comparable


@pytest.mark.parametrize('data, data_type, expected', [
    ('12', DataType.INTEGER, 12),
    ('12', DataType.INTEGER_PERCENTAGE, 12),
    ('1.5', DataType.DOUBLE, 1.5),
    ('true', DataType.BOOLEAN, True),
    ('yes', DataType.BOOLEAN, False),
    ('text', DataType.STRING, 'text'),
])
def test_conversions(data, data_type, expected):
    assert to_comparable(data, data_type) == expected


def test_malformed_data():
    with pytest.raises(ValueError):
        to_comparable('abc', DataType.INTEGER)
    for raw in (' 5', '1_000', '+'):
        with pytest.raises(ValueError):
            to_comparable(raw, DataType.INTEGER_PERCENTAGE)
    assert to_comparable('-5', DataType.INTEGER) == -5


@pytest.mark.parametrize('data_type', [
    DataType.EMAIL, DataType.URL, DataType.UNDEFINED])
def test_unsupported_types(data_type):
    with pytest.raises(NotImplementedError,
                       match=f'Can not extract {data_type.name} '
                             'from raw data x@y'):
        to_comparable('x@y', data_type)


def test_members_do_not_alias():
    assert DataType.EMAIL is not DataType.STRING
    assert DataType.INTEGER_PERCENTAGE is not DataType.INTEGER
    assert len(DataType) == 9


def test_kinds_and_defaults():
    assert DataType.INTEGER.is_of_kind(DataKind.NUMERIC)
    assert not DataType.STRING.is_of_kind(DataKind.NUMERIC)
    assert DataType.UNDEFINED.default_value == 'Undefined'
    assert DataType.BOOLEAN.default_value is False
    with pytest.raises(ValueError):
        DataType.INTEGER.is_of_kind(None)
