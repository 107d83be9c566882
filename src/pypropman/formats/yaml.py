# -*- encoding: utf-8 -*-
# @File   : yaml.py
# @Time   : 2024/10/14 13:26:51
# @Author : Kariko Lin

"""YAML (and JSON) property documents, read through `MappingNode`.

    ```yaml
    properties:
      property:
        - {name: base, value: val1}
        - {name: greeting, value: 'hello ##base##'}
    propertySets:
      propertySet:
        - name: dev
          properties:
            namespace: db
            property:
              - {name: host, value: localhost}
    ```
"""

import json
from typing import Any

import yaml

from ..abstract import TreeFileHandler
from ..namespace import DEFAULT_NAMESPACE
from ..store import PropertyStore, PropsTag
from ..tree import MappingNode


def to_document(store: PropertyStore) -> dict[str, Any]:
    entries = []
    for ns in store.namespaces():
        for k, v in store.get_properties(ns).items():
            entry = {PropsTag.NAME.value: k, MappingNode.TEXT_KEY: v}
            if ns != DEFAULT_NAMESPACE:
                entry[PropsTag.NAMESPACE.value] = ns.id
            entries.append(entry)
    return {PropsTag.PROPERTIES.value: {PropsTag.PROPERTY.value: entries}}


class PropsYamlParser(TreeFileHandler):
    def _load_root(self) -> MappingNode:
        with open(self._fn, 'r', encoding=self._codec) as fp:
            return MappingNode(yaml.safe_load(fp) or {})

    def write(self, store: PropertyStore) -> None:
        with open(self._fn, 'w', encoding=self._codec) as fp:
            yaml.safe_dump(
                to_document(store), fp, allow_unicode=True, sort_keys=False)


class PropsJsonParser(TreeFileHandler):
    def _load_root(self) -> MappingNode:
        with open(self._fn, 'r', encoding=self._codec) as fp:
            return MappingNode(json.load(fp))

    def write(self, store: PropertyStore, indent: int = 2) -> None:
        with open(self._fn, 'w', encoding=self._codec) as fp:
            json.dump(
                to_document(store), fp, ensure_ascii=False, indent=indent)
