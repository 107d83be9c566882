# -*- encoding: utf-8 -*-
# @File   : compose.py
# @Time   : 2024/10/13 11:48:20
# @Author : Kariko Lin

"""Families of stores ("profiles") built on top of each other.

    ```xml
    <config>
      <propertySets>
        <propertySet>  <!-- no name: baseline of every named set -->
          <properties><property name="host">localhost</property></properties>
        </propertySet>
        <propertySet name="dev">
          <properties namespace="db">...</properties>
        </propertySet>
        <propertySet name="test" parent="dev" ignoreNamespace="db">
          ...
        </propertySet>
      </propertySets>
    </config>
    ```

Parents are looked up in one pass, so declare them before children.
"""

import logging
from typing import Iterable
from warnings import warn

from ..namespace import DEFAULT_NAMESPACE, SEPARATOR
from ..tree import PropertyNode
from .consts import PropsTag
from .model import PropertyStore

_logger = logging.getLogger(__name__)


class UnknownPropertySetError(KeyError):
    """A property set refers to a parent not defined (yet)."""
    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ''


def derive_store(
    parent: PropertyStore,
    general: PropertyStore | None = None,
    ignore_namespaces: Iterable[str] = (),
    **options
) -> PropertyStore:
    """Build a store from `general` (if any), then `parent` on top.

    Namespaces of `parent` whose id is in `ignore_namespaces` are left
    out, except the default namespace, which is always inherited.
    """
    if parent is None:
        raise ValueError('parent may not be None')
    if ignore_namespaces is None:
        raise ValueError('ignore_namespaces may not be None')
    ignored = set(ignore_namespaces)
    bases = () if general is None else (general,)
    if not ignored:
        return PropertyStore.from_stores(*bases, parent, **options)

    missing = ignored.difference(ns.id for ns in parent.namespaces())
    if missing:
        warn(f'Namespace(s) {sorted(missing)} to ignore '
             'are not used by the parent store.')
    ret = PropertyStore.from_stores(*bases, **options)
    ret.set_properties(parent.get_properties(DEFAULT_NAMESPACE))
    for ns in parent.namespaces():
        if ns.id not in ignored:
            ret.set_properties(parent.get_properties(ns), ns)
    return ret


def create_property_stores(
    node: PropertyNode, **options
) -> dict[str, PropertyStore]:
    """Compose every named `propertySet` under `node`'s `propertySets`.

    Each named set gets, in order:
    1. the properties of the first unnamed set (the baseline);
    2. everything of its `parent` set, minus the `ignoreNamespace`s
    (`:` separated ids);
    3. its own properties.

    `options` are passed to every store created.

    Raises:
        UnknownPropertySetError: a `parent` is not defined before.
    """
    if node is None:
        raise ValueError('node may not be None')
    ret: dict[str, PropertyStore] = {}
    sets = node.find(PropsTag.PROPERTY_SETS)
    if sets is None:
        return ret
    declared = list(sets.findall(PropsTag.PROPERTY_SET))

    general = next(
        (PropertyStore.from_tree(i, **options)
         for i in declared if i.get(PropsTag.NAME) is None),
        PropertyStore(**options))

    for i in declared:
        if (name := i.get(PropsTag.NAME)) is None:
            continue
        if (parent_name := i.get(PropsTag.PARENT)) is None:
            current = PropertyStore.from_stores(general, **options)
        elif parent_name not in ret:
            raise UnknownPropertySetError(
                f'Unknown parent PropertySet referenced: {parent_name}')
        else:
            ignored = i.get(PropsTag.IGNORE_NAMESPACE)
            current = derive_store(
                ret[parent_name],
                general,
                () if ignored is None else ignored.split(SEPARATOR),
                **options)
        current.set_properties_from_tree(i)
        ret[name.strip()] = current
        _logger.debug('property set "%s" composed, parent: %s',
                      name.strip(), parent_name)
    _logger.info('%d property set(s) composed', len(ret))
    return ret
