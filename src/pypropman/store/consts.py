# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2024/10/12 21:40:02
# @Author : Kariko Lin

from enum import StrEnum


class ResolutionPolicy(StrEnum):
    """Where a `##name##` reference looks for `name`."""
    WITHIN_NAMESPACE = 'WITHIN_NAMESPACE'
    ALL_NAMESPACES = 'ALL_NAMESPACES'
    NONE = 'NONE'  # no macro scanning at all.


class PropsTag(StrEnum):
    """Element and attribute names of a property document tree."""
    PROPERTIES = 'properties'
    PROPERTY = 'property'
    NAME = 'name'
    NAMESPACE = 'namespace'
    PROPERTY_SET = 'propertySet'
    PROPERTY_SETS = 'propertySets'
    PARENT = 'parent'
    IGNORE_NAMESPACE = 'ignoreNamespace'


DEFAULT_MACRO_PATTERN = r'##(.+?)##'
DEFAULT_RESOLUTION_POLICY = ResolutionPolicy.ALL_NAMESPACES
