import pytest

from pypropman import (
    DEFAULT_NAMESPACE,
    MappingNode,
    Namespace,
    PropertyStore,
    ResolutionPolicy,
    UnknownPropertySetError,
    create_property_stores,
    derive_store
)
from xml.etree import ElementTree as et


@pytest.fixture
def parent():
    ret = PropertyStore()
    ret.set_property('a', '1')
    ret.set_property('x', '10', Namespace('ns1'))
    ret.set_property('y', '20', Namespace('ns2'))
    return ret


def test_derive_ignores_namespaces_but_not_the_default(parent):
    child = derive_store(parent, ignore_namespaces={'ns1'})
    assert child.get_properties() == {'a': '1'}
    assert child.get_properties(Namespace('ns2')) == {'y': '20'}
    assert not child.contains_namespace(Namespace('ns1'))


def test_derive_on_top_of_general(parent):
    general = PropertyStore.from_mapping({'a': 'general', 'g': 'kept'})
    child = derive_store(parent, general, ['ns2'])
    assert child.get_properties() == {'a': '1', 'g': 'kept'}
    assert child.contains_namespace(Namespace('ns1'))
    assert not child.contains_namespace(Namespace('ns2'))


def test_derive_without_ignores_copies_everything(parent):
    general = PropertyStore.from_mapping({'g': 'kept'})
    child = derive_store(parent, general)
    assert child.to_dict() == PropertyStore.from_stores(
        general, parent).to_dict()


def test_derive_warns_on_unused_ignores(parent):
    with pytest.warns(UserWarning, match='nsX'):
        derive_store(parent, ignore_namespaces=['nsX'])


def test_derive_forwards_options(parent):
    child = derive_store(
        parent, resolution_policy=ResolutionPolicy.WITHIN_NAMESPACE)
    assert child.resolution_policy is ResolutionPolicy.WITHIN_NAMESPACE


def test_create_property_stores(profiles_root):
    stores = create_property_stores(profiles_root)
    assert sorted(stores) == ['dev', 'test']

    dev = stores['dev']
    assert dev.get_property('app') == 'demo'
    assert dev.get_property('greeting') == 'hello developer'
    assert dev.get_property('host', Namespace('db')) == 'localhost'
    assert dev.get_property('url', Namespace('web')) == \
        'http://localhost:8080/'

    test = stores['test']
    assert test.get_property('user') == 'tester'
    assert test.get_property('greeting') == 'hello developer'
    assert not test.contains_namespace(Namespace('db'))
    assert test.get_property('url', Namespace('web')) == \
        'http://localhost:8080/'


def test_create_property_stores_forwards_options(profiles_root):
    stores = create_property_stores(
        profiles_root, resolution_policy=ResolutionPolicy.NONE)
    assert stores['dev'].get_property('greeting') == 'hello ##user##'


def test_unknown_parent():
    root = et.fromstring(
        '<config><propertySets>'
        '<propertySet name="child" parent="later"/>'
        '<propertySet name="later"/>'
        '</propertySets></config>')
    with pytest.raises(UnknownPropertySetError, match='later'):
        create_property_stores(root)


def test_no_property_sets():
    assert create_property_stores(et.fromstring('<config/>')) == {}


def test_without_general_set():
    root = et.fromstring(
        '<config><propertySets><propertySet name="only">'
        '<properties><property name="k">v</property></properties>'
        '</propertySet></propertySets></config>')
    stores = create_property_stores(root)
    assert stores['only'].get_properties(DEFAULT_NAMESPACE) == {'k': 'v'}


def test_mapping_documents():
    root = MappingNode({
        'propertySets': {'propertySet': [
            {'properties': {'property': [{'name': 'base', 'value': 1}]}},
            {'name': 'p', 'properties': {
                'namespace': 'db',
                'property': [{'name': 'port', 'value': '##base##0'}]}},
            {'name': 'c', 'parent': 'p', 'ignoreNamespace': 'db'},
        ]}
    })
    stores = create_property_stores(root)
    assert stores['p'].get_property('port', Namespace('db')) == '10'
    assert stores['c'].get_property('base') == '1'
    assert not stores['c'].contains_namespace(Namespace('db'))
