# -*- encoding: utf-8 -*-
# @File   : tree.py
# @Time   : 2024/10/13 16:20:09
# @Author : Kariko Lin

"""The tree shape a `PropertyStore` reads properties from.

An `xml.etree.ElementTree.Element` already fits, so XML documents are
consumed directly. Parsed YAML/JSON documents get wrapped by `MappingNode`:

    ```yaml
    properties:
      namespace: db          # block level namespace, optional
      property:
        - {name: host, value: localhost}
        - {name: port, value: 5432, namespace: db:replica}
    ```
"""

from typing import Any, Iterable, Mapping, Protocol, Sequence


class PropertyNode(Protocol):
    @property
    def text(self) -> str | None: ...

    def find(self, tag: str) -> 'PropertyNode | None': ...

    def findall(self, tag: str) -> Iterable['PropertyNode']: ...

    def get(self, key: str, default: str | None = None) -> str | None: ...


class MappingNode:
    """`PropertyNode` view over a nested dict / list document.

    - a dict or list of dicts under `tag` are child nodes;
    - scalars are attributes (stringified, as XML attributes would be);
    - the `value` key holds the node text.
    """
    TEXT_KEY = 'value'

    def __init__(self, data: Mapping[str, Any]) -> None:
        if data is None:
            raise ValueError('data may not be None')
        self._data = data

    @staticmethod
    def _as_str(value: Any) -> str:
        if isinstance(value, bool):
            return str(value).lower()
        return str(value)

    @property
    def text(self) -> str | None:
        value = self._data.get(self.TEXT_KEY)
        if value is None or isinstance(value, (Mapping, list)):
            return None
        return self._as_str(value)

    def findall(self, tag: str) -> list['MappingNode']:
        child = self._data.get(tag)
        if isinstance(child, Mapping):
            return [MappingNode(child)]
        if isinstance(child, Sequence) and not isinstance(child, str):
            return [MappingNode(i) for i in child if isinstance(i, Mapping)]
        return []

    def find(self, tag: str) -> 'MappingNode | None':
        found = self.findall(tag)
        return found[0] if found else None

    def get(self, key: str, default: str | None = None) -> str | None:
        value = self._data.get(key)
        if value is None or isinstance(value, (Mapping, list)):
            return default
        return self._as_str(value)

    def __repr__(self) -> str:
        return f'MappingNode({sorted(self._data)})'
