import pytest

from pypropman import DEFAULT_NAMESPACE, Namespace


def test_identity_is_the_joined_id():
    joined = Namespace('a:b')
    split = Namespace('a', 'b')
    assert joined == split
    assert hash(joined) == hash(split)
    assert joined.segments != split.segments
    assert {joined: 1}[split] == 1


def test_derive_returns_a_new_namespace():
    base = Namespace('db')
    derived = base.derive('replica')
    assert derived.id == 'db:replica'
    assert derived.segments == ('db', 'replica')
    assert base.segments == ('db',)
    assert derived is not base


def test_none_is_rejected():
    with pytest.raises(ValueError):
        Namespace('a', None)
    with pytest.raises(ValueError):
        Namespace('a').derive(None)


def test_empty_segments_give_empty_id():
    assert Namespace().id == ''
    assert str(Namespace()) == ''


def test_ordering_by_id():
    ids = [ns.id for ns in sorted(
        [Namespace('b'), Namespace('a', 'z'), Namespace('a')])]
    assert ids == ['a', 'a:z', 'b']
    assert Namespace('a') <= Namespace('a')
    with pytest.raises(ValueError):
        Namespace('a') < None


def test_not_equal_to_plain_strings():
    assert Namespace('a') != 'a'
    assert str(Namespace('a', 'b')) == 'a:b'
    assert repr(Namespace('a', 'b')) == "Namespace('a:b')"


def test_immutable():
    ns = Namespace('a')
    with pytest.raises(AttributeError):
        ns.extra = 1
    with pytest.raises(AttributeError):
        ns.segments = ('b',)


def test_default_namespace_id_is_unlikely_to_collide():
    assert DEFAULT_NAMESPACE == Namespace(
        'default_namespace_do_not_use_elsewhere ##$$%%')
    assert DEFAULT_NAMESPACE != Namespace('default')
