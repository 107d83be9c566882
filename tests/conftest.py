# tests/conftest.py
from xml.etree import ElementTree as et

import pytest

from pypropman import PropertyStore
from pypropman.store import resolver


PROFILES_XML = """
<config>
  <propertySets>
    <propertySet>
      <properties>
        <property name="app">demo</property>
        <property name="greeting">hello ##user##</property>
      </properties>
    </propertySet>
    <propertySet name=" dev ">
      <properties>
        <property name="user">developer</property>
        <property name="host" namespace="db">localhost</property>
        <property name="url" namespace="web">http://##host##:8080/</property>
      </properties>
    </propertySet>
    <propertySet name="test" parent="dev" ignoreNamespace="db">
      <properties>
        <property name="user">tester</property>
      </properties>
    </propertySet>
  </propertySets>
</config>
"""


@pytest.fixture(autouse=True)
def restore_defaults(monkeypatch):
    """Keep process wide defaults from leaking between tests."""
    monkeypatch.setattr(resolver, '_default_pattern', resolver._default_pattern)
    monkeypatch.setattr(PropertyStore, 'DEFAULT_AVOID_OVERWRITES', False)
    yield


@pytest.fixture
def store():
    return PropertyStore()


@pytest.fixture
def profiles_root():
    return et.fromstring(PROFILES_XML)
