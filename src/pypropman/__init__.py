# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/12 20:55:31
# @Author : Kariko Lin

import logging

from .namespace import DEFAULT_NAMESPACE, Namespace
from .datatype import DataKind, DataType, to_comparable
from .store import (
    MissingPropertyError,
    PropertyStore,
    ResolutionPolicy,
    UnknownPropertySetError,
    create_property_stores,
    derive_store,
    set_default_macro_pattern
)
from .tokens import MappingTokenResolver, TokenReplacingReader, replace_tokens
from .tree import MappingNode, PropertyNode
from .formats import (
    IniParser,
    PropsJsonParser,
    PropsXmlParser,
    PropsYamlParser
)

__all__ = [
    'Namespace', 'DEFAULT_NAMESPACE',
    'DataKind', 'DataType', 'to_comparable',
    'PropertyStore', 'ResolutionPolicy', 'set_default_macro_pattern',
    'MissingPropertyError', 'UnknownPropertySetError',
    'create_property_stores', 'derive_store',
    'MappingTokenResolver', 'TokenReplacingReader', 'replace_tokens',
    'MappingNode', 'PropertyNode',
    'IniParser', 'PropsJsonParser', 'PropsXmlParser', 'PropsYamlParser'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
