# -*- encoding: utf-8 -*-
# @File   : xml.py
# @Time   : 2024/10/14 11:05:42
# @Author : Kariko Lin

"""XML property documents.

    ```xml
    <config>
      <properties namespace="db">
        <property name="host">localhost</property>
        <property name="url" namespace="web">http://##host##/</property>
      </properties>
    </config>
    ```
"""

from xml.dom import minidom
from xml.etree import ElementTree as et

from ..abstract import TreeFileHandler
from ..namespace import DEFAULT_NAMESPACE
from ..store import PropertyStore, PropsTag


class PropsXmlParser(TreeFileHandler):
    """Since the encoding of xml is limited,
    this serializer would only supports 'utf-8'."""

    def _load_root(self) -> et.Element:
        return et.parse(self._fn).getroot()

    @staticmethod
    def to_element(
        store: PropertyStore, root_tag: str = 'config'
    ) -> et.Element:
        root = et.Element(root_tag)
        block = et.SubElement(root, PropsTag.PROPERTIES)
        for ns in store.namespaces():
            for k, v in store.get_properties(ns).items():
                entry = et.SubElement(
                    block, PropsTag.PROPERTY, {PropsTag.NAME: k})
                if ns != DEFAULT_NAMESPACE:
                    entry.attrib[PropsTag.NAMESPACE] = ns.id
                entry.text = v
        return root

    def write(self, store: PropertyStore, indent: str = '\t') -> None:
        """Save all properties into one `properties` block.
        Only `utf-8` supported."""
        formatted = minidom.parseString(
            et.tostring(self.to_element(store), 'utf-8'))
        with open(self._fn, 'w', encoding='utf-8') as fp:
            fp.write(formatted.toprettyxml(indent, encoding='utf-8').decode())
